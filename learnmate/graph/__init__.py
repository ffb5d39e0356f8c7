"""LangGraph workflow and state management."""

from .state import StudyState, create_initial_state
from .workflow import compile_workflow, create_study_workflow

__all__ = [
    "StudyState",
    "create_initial_state",
    "compile_workflow",
    "create_study_workflow",
]
