"""State passed between the nodes of the study pipeline."""

from pathlib import Path
from typing import TypedDict

from learnmate.models.profile import LearningStyle
from learnmate.models.study_aid import StudyAidArtifact


class StudyState(TypedDict):
    """Shared state for one run of the study pipeline."""

    document: str
    style: LearningStyle
    content: str | None
    artifact: StudyAidArtifact | None


def create_initial_state(document: str | Path, style: LearningStyle) -> StudyState:
    """
    Create the state a pipeline run starts from.

    Args:
        document: Path of the document to study
        style: Learning style to generate for

    Returns:
        StudyState with nothing extracted or generated yet
    """
    return {
        "document": str(document),
        "style": LearningStyle(style),
        "content": None,
        "artifact": None,
    }
