"""Adaptive quiz engine."""

from .quiz_engine import STYLE_SWITCH_STREAK, QuizEngine

__all__ = ["QuizEngine", "STYLE_SWITCH_STREAK"]
