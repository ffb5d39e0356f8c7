"""AI generation for study aids and quizzes."""

from .generator import GenerationClient, create_chat_model

__all__ = [
    "GenerationClient",
    "create_chat_model",
]
