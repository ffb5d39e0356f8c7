"""Tests for the adaptive quiz engine."""

import pytest
from conftest import make_question, wrong_answer

from learnmate.engine.quiz_engine import QuizEngine
from learnmate.errors import EmptyBatch, InvalidOperation
from learnmate.io.profile_store import InMemoryProfileStore
from learnmate.models.profile import LearningStyle, ProfileState
from learnmate.models.quiz import QuizBatch, QuizStatus


class FailingProfileStore(InMemoryProfileStore):
    """Store whose save raises until `fail` is cleared."""

    def __init__(self):
        super().__init__(LearningStyle.VISUAL)
        self.fail = True

    def save(self, style: LearningStyle) -> None:
        if self.fail:
            raise OSError("disk full")
        super().save(style)


def answer_correctly(engine: QuizEngine) -> QuizStatus:
    return engine.submit_answer(engine.current_question.correct_answer_index)


def answer_wrongly(engine: QuizEngine) -> QuizStatus:
    return engine.submit_answer(wrong_answer(engine.current_question))


class TestLoadBatch:
    """Test starting a quiz."""

    def test_initial_state(self, loaded_engine: QuizEngine):
        """Test that a loaded batch starts at the first question."""
        session = loaded_engine.session

        assert session.position == 0
        assert session.status == QuizStatus.UNANSWERED
        assert session.score == 0
        assert session.consecutive_incorrect == 0
        assert session.selected_option_index is None

    def test_empty_batch_is_rejected(self, engine: QuizEngine):
        """Test that a batch without questions cannot be loaded."""
        with pytest.raises(EmptyBatch):
            engine.load_batch(QuizBatch(questions=[]))

        assert engine.session is None

    def test_loading_replaces_previous_session(self, loaded_engine: QuizEngine):
        """Test that a new batch resets all progress."""
        answer_wrongly(loaded_engine)
        loaded_engine.advance()

        new_batch = QuizBatch(questions=[make_question(10), make_question(11)])
        loaded_engine.load_batch(new_batch)

        assert loaded_engine.session.batch is new_batch
        assert loaded_engine.session.position == 0
        assert loaded_engine.session.consecutive_incorrect == 0
        assert loaded_engine.total == 2


class TestSubmitAnswer:
    """Test answering questions."""

    def test_correct_answer(self, loaded_engine: QuizEngine, profile: ProfileState):
        """Test that a correct answer scores and raises confidence by one."""
        status = answer_correctly(loaded_engine)

        assert status == QuizStatus.CORRECT
        assert loaded_engine.session.score == 1
        assert loaded_engine.session.consecutive_incorrect == 0
        assert profile.confidence == 86

    def test_incorrect_answer(self, loaded_engine: QuizEngine, profile: ProfileState):
        """Test that a miss grows the streak but leaves confidence alone."""
        index = wrong_answer(loaded_engine.current_question)
        status = loaded_engine.submit_answer(index)

        assert status == QuizStatus.INCORRECT
        assert loaded_engine.session.selected_option_index == index
        assert loaded_engine.session.score == 0
        assert loaded_engine.session.consecutive_incorrect == 1
        assert profile.confidence == 85

    def test_correct_answer_resets_streak(self, loaded_engine: QuizEngine):
        """Test that any correct answer clears the miss streak."""
        answer_wrongly(loaded_engine)
        loaded_engine.advance()
        answer_wrongly(loaded_engine)
        loaded_engine.advance()
        assert loaded_engine.session.consecutive_incorrect == 2

        answer_correctly(loaded_engine)

        assert loaded_engine.session.consecutive_incorrect == 0

    def test_second_submission_is_rejected(
        self, loaded_engine: QuizEngine, profile: ProfileState
    ):
        """Test that a question can only be answered once."""
        answer_wrongly(loaded_engine)
        before = loaded_engine.session.model_dump()
        confidence_before = profile.confidence

        with pytest.raises(InvalidOperation):
            answer_correctly(loaded_engine)

        assert loaded_engine.session.model_dump() == before
        assert profile.confidence == confidence_before

    @pytest.mark.parametrize("index", [-1, 4, 10])
    def test_out_of_range_index_is_rejected(self, loaded_engine: QuizEngine, index: int):
        """Test that only options 0-3 can be chosen."""
        with pytest.raises(InvalidOperation):
            loaded_engine.submit_answer(index)

        assert loaded_engine.session.status == QuizStatus.UNANSWERED
        assert loaded_engine.session.selected_option_index is None

    def test_requires_loaded_batch(self, engine: QuizEngine):
        """Test that answering without a quiz fails."""
        with pytest.raises(InvalidOperation):
            engine.submit_answer(0)


class TestAdvance:
    """Test moving through the quiz."""

    def test_cannot_advance_unanswered(self, loaded_engine: QuizEngine):
        """Test that the current question must be answered first."""
        with pytest.raises(InvalidOperation):
            loaded_engine.advance()

    def test_cannot_advance_without_batch(self, engine: QuizEngine):
        """Test that advancing without a quiz fails."""
        with pytest.raises(InvalidOperation):
            engine.advance()

    def test_advance_moves_to_next_question(self, loaded_engine: QuizEngine):
        """Test that advancing clears the answer state."""
        answer_correctly(loaded_engine)
        result = loaded_engine.advance()

        assert result.position == 1
        assert result.status == QuizStatus.UNANSWERED
        assert result.style_switch is None
        assert not result.completed
        assert loaded_engine.session.selected_option_index is None

    def test_last_question_completes_quiz(self, loaded_engine: QuizEngine):
        """Test that advancing past the last question is terminal."""
        for _ in range(4):
            answer_correctly(loaded_engine)
            loaded_engine.advance()

        answer_correctly(loaded_engine)
        result = loaded_engine.advance()

        assert result.completed
        assert loaded_engine.is_completed
        assert loaded_engine.session.position == 4

        with pytest.raises(InvalidOperation):
            loaded_engine.advance()
        with pytest.raises(InvalidOperation):
            loaded_engine.submit_answer(0)


class TestStyleSwitch:
    """Test the three-misses-in-a-row style switch."""

    def test_switch_after_three_misses(
        self,
        loaded_engine: QuizEngine,
        profile: ProfileState,
        store: InMemoryProfileStore,
    ):
        """Test that the third miss in a row switches style on advance."""
        for _ in range(2):
            answer_wrongly(loaded_engine)
            assert loaded_engine.advance().style_switch is None

        answer_wrongly(loaded_engine)
        assert profile.current_style == LearningStyle.VISUAL

        result = loaded_engine.advance()

        assert result.style_switch is not None
        assert result.style_switch.previous_style == LearningStyle.VISUAL
        assert result.style_switch.new_style == LearningStyle.PRACTICAL
        assert result.style_switch.confidence == 60
        assert profile.current_style == LearningStyle.PRACTICAL
        assert profile.confidence == 60
        assert loaded_engine.session.consecutive_incorrect == 0
        assert store.saved == [LearningStyle.PRACTICAL]

    def test_two_misses_do_not_switch(
        self, loaded_engine: QuizEngine, profile: ProfileState, store: InMemoryProfileStore
    ):
        """Test that a streak below the threshold keeps the style."""
        for _ in range(2):
            answer_wrongly(loaded_engine)
            loaded_engine.advance()

        assert profile.current_style == LearningStyle.VISUAL
        assert profile.confidence == 85
        assert store.saved == []

    @pytest.mark.parametrize(
        "start,expected",
        [
            (LearningStyle.VISUAL, LearningStyle.PRACTICAL),
            (LearningStyle.PRACTICAL, LearningStyle.CONCEPTUAL),
            (LearningStyle.CONCEPTUAL, LearningStyle.VISUAL),
        ],
    )
    def test_switch_follows_cyclic_order(
        self, sample_batch: QuizBatch, start: LearningStyle, expected: LearningStyle
    ):
        """Test that each style switches to the next one in order."""
        profile = ProfileState(current_style=start)
        engine = QuizEngine(profile)
        engine.load_batch(sample_batch)

        for _ in range(3):
            answer_wrongly(engine)
            result = engine.advance()

        assert result.style_switch.new_style == expected
        assert profile.current_style == expected

    def test_streak_restarts_after_switch(self, loaded_engine: QuizEngine, profile: ProfileState):
        """Test that the miss right after a switch does not switch again."""
        for _ in range(3):
            answer_wrongly(loaded_engine)
            loaded_engine.advance()

        answer_wrongly(loaded_engine)

        assert loaded_engine.session.consecutive_incorrect == 1
        assert loaded_engine.advance().style_switch is None
        assert profile.current_style == LearningStyle.PRACTICAL

    def test_failed_save_leaves_state_unchanged(self, sample_batch: QuizBatch):
        """Test that a store error aborts the switch and a later advance still switches."""
        store = FailingProfileStore()
        profile = ProfileState(current_style=LearningStyle.VISUAL, confidence=85)
        engine = QuizEngine(profile, store)
        engine.load_batch(sample_batch)

        for _ in range(2):
            answer_wrongly(engine)
            engine.advance()
        answer_wrongly(engine)

        with pytest.raises(OSError, match="disk full"):
            engine.advance()

        assert profile.current_style == LearningStyle.VISUAL
        assert profile.confidence == 85
        assert engine.session.position == 2
        assert engine.session.status == QuizStatus.INCORRECT
        assert engine.session.consecutive_incorrect == 3

        store.fail = False
        result = engine.advance()

        assert result.style_switch is not None
        assert result.style_switch.new_style == LearningStyle.PRACTICAL
        assert profile.confidence == 60
        assert store.saved == [LearningStyle.PRACTICAL]

    def test_confidence_never_drops_below_zero(self, sample_batch: QuizBatch):
        """Test that the switch penalty saturates at zero."""
        profile = ProfileState(confidence=10)
        engine = QuizEngine(profile)
        engine.load_batch(sample_batch)

        for _ in range(3):
            answer_wrongly(engine)
            engine.advance()

        assert profile.confidence == 0

    def test_confidence_never_exceeds_hundred(self, sample_batch: QuizBatch):
        """Test that the correct answer bonus saturates at 100."""
        profile = ProfileState(confidence=99)
        engine = QuizEngine(profile)
        engine.load_batch(sample_batch)

        for _ in range(5):
            answer_correctly(engine)
            assert 0 <= profile.confidence <= 100
            engine.advance()

        assert profile.confidence == 100


class TestExplanationToShow:
    """Test which explanation an incorrect answer shows."""

    def test_none_before_answering(self, loaded_engine: QuizEngine):
        assert loaded_engine.explanation_to_show() is None

    def test_none_after_correct_answer(self, loaded_engine: QuizEngine):
        answer_correctly(loaded_engine)
        assert loaded_engine.explanation_to_show() is None

    def test_uses_current_style_below_threshold(self, loaded_engine: QuizEngine):
        """Test that early misses are explained in the learner's style."""
        answer_wrongly(loaded_engine)

        explanation = loaded_engine.explanation_to_show()

        assert explanation.style == LearningStyle.VISUAL
        assert explanation.text == "Visual explanation 1"

    def test_previews_next_style_at_threshold(self, loaded_engine: QuizEngine):
        """Test that the third miss is explained in the upcoming style."""
        for _ in range(2):
            answer_wrongly(loaded_engine)
            loaded_engine.advance()
        answer_wrongly(loaded_engine)

        explanation = loaded_engine.explanation_to_show()

        assert explanation.style == LearningStyle.PRACTICAL
        assert explanation.text == "Practical explanation 3"

    def test_follows_style_after_switch(self, loaded_engine: QuizEngine):
        """Test that the explanation is recomputed from the switched profile."""
        for _ in range(3):
            answer_wrongly(loaded_engine)
            loaded_engine.advance()
        answer_wrongly(loaded_engine)

        explanation = loaded_engine.explanation_to_show()

        assert explanation.style == LearningStyle.PRACTICAL
        assert explanation.text == "Practical explanation 4"


class TestRetake:
    """Test retaking a quiz."""

    def test_retake_resets_progress_but_not_profile(
        self, loaded_engine: QuizEngine, profile: ProfileState, sample_batch: QuizBatch
    ):
        for _ in range(3):
            answer_wrongly(loaded_engine)
            loaded_engine.advance()
        style, confidence = profile.current_style, profile.confidence

        loaded_engine.retake()

        session = loaded_engine.session
        assert session.batch is sample_batch
        assert session.position == 0
        assert session.score == 0
        assert session.consecutive_incorrect == 0
        assert session.status == QuizStatus.UNANSWERED
        assert (profile.current_style, profile.confidence) == (style, confidence)

    def test_retake_requires_batch(self, engine: QuizEngine):
        with pytest.raises(InvalidOperation):
            engine.retake()


class TestScenario:
    """End-to-end walk through a five question quiz."""

    def test_full_quiz(self, loaded_engine: QuizEngine, profile: ProfileState):
        # Q1 correct
        answer_correctly(loaded_engine)
        assert loaded_engine.session.score == 1
        assert profile.confidence == 86
        loaded_engine.advance()

        # Q2 and Q3 incorrect
        for _ in range(2):
            answer_wrongly(loaded_engine)
            assert loaded_engine.advance().style_switch is None

        # Q4 incorrect, third in a row
        answer_wrongly(loaded_engine)
        assert loaded_engine.session.consecutive_incorrect == 3
        result = loaded_engine.advance()
        assert result.style_switch.new_style == LearningStyle.PRACTICAL
        assert profile.confidence == 61
        assert loaded_engine.session.consecutive_incorrect == 0

        # Q5 correct
        answer_correctly(loaded_engine)
        assert loaded_engine.session.score == 2
        assert profile.confidence == 62

        result = loaded_engine.advance()
        assert result.completed
        assert (loaded_engine.score, loaded_engine.total) == (2, 5)
