"""Adaptive quiz engine - scores answers and moves the learner between styles."""

import logging

from learnmate.errors import EmptyBatch, InvalidOperation
from learnmate.io.profile_store import ProfileStore
from learnmate.models.profile import ProfileState
from learnmate.models.quiz import (
    OPTION_COUNT,
    AdvanceResult,
    Explanation,
    QuizBatch,
    QuizQuestion,
    QuizSession,
    QuizStatus,
    StyleSwitch,
)

logger = logging.getLogger(__name__)

# Misses in a row before the learner is moved to the next style
STYLE_SWITCH_STREAK = 3


class QuizEngine:
    """
    Drives one quiz session over a batch of questions.

    The engine is the only writer of ProfileState: a correct answer raises
    confidence by one, and advancing past the third miss in a row switches
    the learner to the next style, costs 25 confidence and resets the streak.
    """

    def __init__(self, profile: ProfileState, store: ProfileStore | None = None):
        """
        Initialize the engine.

        Args:
            profile: Learner profile to read and adjust
            store: Where a switched style is persisted (optional)
        """
        self.profile = profile
        self.store = store
        self._session: QuizSession | None = None

    @property
    def session(self) -> QuizSession | None:
        return self._session

    @property
    def current_question(self) -> QuizQuestion:
        return self._require_session().current_question

    @property
    def score(self) -> int:
        return self._require_session().score

    @property
    def total(self) -> int:
        return len(self._require_session().batch)

    @property
    def is_completed(self) -> bool:
        return self._session is not None and self._session.status == QuizStatus.COMPLETED

    def load_batch(self, batch: QuizBatch) -> QuizSession:
        """
        Start a new session over a batch, discarding any previous one.

        Raises:
            EmptyBatch: If the batch has no questions
        """
        if len(batch) == 0:
            raise EmptyBatch("Cannot start a quiz without questions")

        self._session = QuizSession(batch=batch)
        logger.info(f"Loaded quiz batch with {len(batch)} questions")
        return self._session

    def retake(self) -> QuizSession:
        """Restart the current batch from the first question. The profile is left as is."""
        session = self._require_session()
        self._session = QuizSession(batch=session.batch)
        return self._session

    def submit_answer(self, index: int) -> QuizStatus:
        """
        Record the answer to the current question.

        Args:
            index: Zero-based option index

        Returns:
            The new status, CORRECT or INCORRECT

        Raises:
            InvalidOperation: If the question was already answered, the quiz is
                finished, or the index is not a valid option
        """
        session = self._require_session()
        if session.status != QuizStatus.UNANSWERED:
            raise InvalidOperation(
                f"Question {session.position + 1} cannot be answered in state {session.status.value}"
            )
        if not 0 <= index < OPTION_COUNT:
            raise InvalidOperation(f"Option index must be between 0 and {OPTION_COUNT - 1}, got {index}")

        session.selected_option_index = index
        if index == session.current_question.correct_answer_index:
            session.status = QuizStatus.CORRECT
            session.score += 1
            session.consecutive_incorrect = 0
            self.profile.reward_correct_answer()
        else:
            session.status = QuizStatus.INCORRECT
            session.consecutive_incorrect += 1

        return session.status

    def explanation_to_show(self) -> Explanation | None:
        """
        Pick the explanation for an incorrect answer.

        At the switch threshold the explanation previews the style the learner
        is about to be moved to; otherwise it uses the current style.

        Returns:
            The explanation, or None unless the current answer was incorrect
        """
        session = self._session
        if session is None or session.status != QuizStatus.INCORRECT:
            return None

        style = self.profile.current_style
        if session.consecutive_incorrect >= STYLE_SWITCH_STREAK:
            style = style.next_style()

        return Explanation(style=style, text=session.current_question.explanation_for(style))

    def advance(self) -> AdvanceResult:
        """
        Move past the answered question.

        Returns:
            AdvanceResult, carrying a StyleSwitch if the learner was moved to
            another style

        Raises:
            InvalidOperation: If no quiz is loaded, the question is unanswered,
                or the quiz is already completed
        """
        session = self._require_session()
        if session.status == QuizStatus.UNANSWERED:
            raise InvalidOperation("Answer the current question before moving on")
        if session.status == QuizStatus.COMPLETED:
            raise InvalidOperation("The quiz is already completed")

        if session.is_last_question:
            session.status = QuizStatus.COMPLETED
            logger.info(f"Quiz completed with score {session.score}/{len(session.batch)}")
            return AdvanceResult(status=session.status, position=session.position)

        style_switch = None
        if (
            session.status == QuizStatus.INCORRECT
            and session.consecutive_incorrect >= STYLE_SWITCH_STREAK
        ):
            style_switch = self._switch_style(session)

        session.position += 1
        session.status = QuizStatus.UNANSWERED
        session.selected_option_index = None

        return AdvanceResult(
            status=session.status,
            position=session.position,
            style_switch=style_switch,
        )

    def _switch_style(self, session: QuizSession) -> StyleSwitch:
        previous_style = self.profile.current_style

        # Persist before mutating: a failed save leaves the engine untouched
        if self.store is not None:
            self.store.save(previous_style.next_style())

        new_style = self.profile.switch_to_next_style()
        session.consecutive_incorrect = 0

        logger.info(
            f"Switching learning style {previous_style.value} -> {new_style.value} "
            f"after {STYLE_SWITCH_STREAK} misses (confidence {self.profile.confidence})"
        )

        return StyleSwitch(
            previous_style=previous_style,
            new_style=new_style,
            confidence=self.profile.confidence,
        )

    def _require_session(self) -> QuizSession:
        if self._session is None:
            raise InvalidOperation("No quiz is loaded")
        return self._session
