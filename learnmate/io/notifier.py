"""User-facing notifications emitted by a learner session."""

import logging

from learnmate.models.profile import LearningStyle

logger = logging.getLogger(__name__)


class Notifier:
    """
    Receives session events. Every hook is fire-and-forget.

    The base class ignores all events; subclasses override what they show.
    """

    def files_selected(self, count: int) -> None:
        pass

    def generation_started(self) -> None:
        pass

    def generation_succeeded(self) -> None:
        pass

    def generation_failed(self, message: str) -> None:
        pass

    def answer_correct(self) -> None:
        pass

    def answer_incorrect(self, streak: int) -> None:
        pass

    def style_switched(self, new_style: LearningStyle) -> None:
        pass

    def quiz_completed(self, score: int, total: int) -> None:
        pass


class LoggingNotifier(Notifier):
    """Writes every event to the log."""

    def files_selected(self, count: int) -> None:
        logger.info(f"{count} file(s) ready to process")

    def generation_started(self) -> None:
        logger.info("Creating study aid...")

    def generation_succeeded(self) -> None:
        logger.info("Study aid ready")

    def generation_failed(self, message: str) -> None:
        logger.error(f"Generation failed: {message}")

    def answer_correct(self) -> None:
        logger.info("Correct answer")

    def answer_incorrect(self, streak: int) -> None:
        logger.info(f"Incorrect answer ({streak} in a row)")

    def style_switched(self, new_style: LearningStyle) -> None:
        logger.info(f"Learning style switched to {new_style.value}")

    def quiz_completed(self, score: int, total: int) -> None:
        logger.info(f"Quiz completed: {score}/{total}")
