"""Learner session - the study aid pipeline and the adaptive quiz for one learner."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from learnmate.agents.generator import GenerationClient
from learnmate.config.settings import Settings, get_settings
from learnmate.engine.quiz_engine import QuizEngine
from learnmate.errors import Busy, InvalidOperation
from learnmate.graph.workflow import ContentExtractor
from learnmate.io.notifier import LoggingNotifier, Notifier
from learnmate.io.profile_store import ProfileStore
from learnmate.models.profile import ProfileState
from learnmate.models.quiz import AdvanceResult, Explanation, QuizBatch, QuizStatus
from learnmate.models.study_aid import StudyAidArtifact
from learnmate.session.study_aid import StudyAidSession

logger = logging.getLogger(__name__)


class LearnerSession:
    """
    Wires the study pipeline, the quiz engine and the learner profile together.

    While a generation request is awaiting the model the session is busy:
    every mutating call raises Busy until the request resolves.
    """

    def __init__(
        self,
        extractor: ContentExtractor,
        client: GenerationClient,
        store: ProfileStore,
        notifier: Notifier | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize the session.

        Args:
            extractor: Content extractor for uploaded documents
            client: Generation client for study aids and quizzes
            store: Where the learning style is loaded from and saved to
            notifier: Receives user-facing events (default: logs them)
            settings: Settings for the starting confidence (default: get_settings())
        """
        settings = settings or get_settings()
        self.store = store
        self.notifier = notifier or LoggingNotifier()
        self.profile = ProfileState(
            current_style=store.load(),
            confidence=settings.initial_confidence,
        )
        self.client = client
        self.study = StudyAidSession(extractor, client)
        self.engine = QuizEngine(self.profile, store)
        self.selected_files: list[Path] = []
        self.processed_files: list[str] = []
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def artifact(self) -> StudyAidArtifact | None:
        return self.study.artifact

    def select_files(self, paths: list[str | Path]) -> list[Path]:
        """Remember the files to process; only the first is used per study aid."""
        self._ensure_idle()
        self.selected_files = [Path(p) for p in paths]
        self.notifier.files_selected(len(self.selected_files))
        return self.selected_files

    async def create_study_aid(self, document: str | Path | None = None) -> StudyAidArtifact:
        """
        Generate a study aid for a document in the learner's current style.

        Args:
            document: Document to use (default: the first selected file)

        Returns:
            The new study aid artifact

        Raises:
            Busy: If another generation request is in flight
            InvalidOperation: If no document was given or selected
        """
        self._ensure_idle()
        if document is None:
            if not self.selected_files:
                raise InvalidOperation("No files selected")
            document = self.selected_files[0]

        with self._generating():
            artifact = await self.study.produce(document, self.profile.current_style)

        self.processed_files.append(Path(document).name)
        self.selected_files = []
        return artifact

    async def generate_quiz(self) -> QuizBatch:
        """
        Generate a new quiz from the current study aid and start it.

        Raises:
            Busy: If another generation request is in flight
            InvalidOperation: If there is no study aid yet
        """
        self._ensure_idle()
        artifact = self.study.artifact
        if artifact is None:
            raise InvalidOperation("Create a study aid before generating a quiz")

        with self._generating():
            batch = await self.client.generate_quiz_batch(artifact.text)

        self.engine.load_batch(batch)
        return batch

    def submit_answer(self, index: int) -> QuizStatus:
        self._ensure_idle()
        status = self.engine.submit_answer(index)
        if status == QuizStatus.CORRECT:
            self.notifier.answer_correct()
        else:
            self.notifier.answer_incorrect(self.engine.session.consecutive_incorrect)
        return status

    def explanation_to_show(self) -> Explanation | None:
        return self.engine.explanation_to_show()

    def advance(self) -> AdvanceResult:
        self._ensure_idle()
        result = self.engine.advance()
        if result.style_switch is not None:
            self.notifier.style_switched(result.style_switch.new_style)
        if result.completed:
            self.notifier.quiz_completed(self.engine.score, self.engine.total)
        return result

    def retake(self) -> None:
        self._ensure_idle()
        self.engine.retake()

    def record_feedback(self, helpful: bool) -> None:
        """Log whether the learner found the study aid helpful."""
        logger.info(
            f"Feedback received: {'Helpful' if helpful else 'Not Helpful'} "
            f"for style: {self.profile.current_style.value}"
        )

    @contextmanager
    def _generating(self) -> Iterator[None]:
        self._busy = True
        self.notifier.generation_started()
        try:
            yield
        except Exception as e:
            self.notifier.generation_failed(str(e))
            raise
        finally:
            self._busy = False
        self.notifier.generation_succeeded()

    def _ensure_idle(self) -> None:
        if self._busy:
            raise Busy("A generation request is still in progress")
