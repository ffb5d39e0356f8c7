"""LearnMate - personalised study aids and adaptive quizzes."""

__version__ = "0.1.0"
