"""Sessions tying the pipeline, engine, and profile together."""

from .learner import LearnerSession
from .study_aid import StudyAidSession

__all__ = ["LearnerSession", "StudyAidSession"]
