"""Data models for study aids, quizzes, and learner profiles."""

from .profile import STYLE_INFO, LearningStyle, ProfileState
from .quiz import (
    AdvanceResult,
    Explanation,
    QuizBatch,
    QuizQuestion,
    QuizSession,
    QuizStatus,
    StyleExplanations,
    StyleSwitch,
)
from .study_aid import Source, StudyAidArtifact, StudyAidResult

__all__ = [
    "LearningStyle",
    "ProfileState",
    "STYLE_INFO",
    "QuizQuestion",
    "QuizBatch",
    "QuizSession",
    "QuizStatus",
    "StyleExplanations",
    "StyleSwitch",
    "AdvanceResult",
    "Explanation",
    "Source",
    "StudyAidArtifact",
    "StudyAidResult",
]
