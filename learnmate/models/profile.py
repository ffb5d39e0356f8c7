"""Pydantic models for the learner's style profile."""

from enum import Enum

from pydantic import BaseModel, Field

MAX_CONFIDENCE = 100
MIN_CONFIDENCE = 0
CORRECT_ANSWER_REWARD = 1
STYLE_SWITCH_PENALTY = 25


class LearningStyle(str, Enum):
    """Learning styles, in rotation order."""

    VISUAL = "visual"
    PRACTICAL = "practical"
    CONCEPTUAL = "conceptual"

    def next_style(self) -> "LearningStyle":
        """Return the style after this one, wrapping back to the first."""
        styles = list(LearningStyle)
        return styles[(styles.index(self) + 1) % len(styles)]

    @property
    def label(self) -> str:
        return STYLE_INFO[self]["title"]

    @property
    def description(self) -> str:
        return STYLE_INFO[self]["description"]


STYLE_INFO: dict[LearningStyle, dict[str, str]] = {
    LearningStyle.VISUAL: {
        "title": "Visual Learner",
        "description": "You learn best through diagrams, charts, and visual representations",
    },
    LearningStyle.PRACTICAL: {
        "title": "Practical Learner",
        "description": "You excel with real-world examples and hands-on practice",
    },
    LearningStyle.CONCEPTUAL: {
        "title": "Conceptual Learner",
        "description": "You thrive on understanding theories and underlying principles",
    },
}


def clamp_confidence(value: int) -> int:
    """Clamp a confidence value into [0, 100]."""
    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, value))


class ProfileState(BaseModel):
    """The learner's active style and how sure we are about it."""

    current_style: LearningStyle = Field(
        default=LearningStyle.VISUAL,
        description="Style used for prompts and explanations",
    )
    confidence: int = Field(
        default=85,
        ge=MIN_CONFIDENCE,
        le=MAX_CONFIDENCE,
        description="Profile confidence in percent",
    )

    def reward_correct_answer(self) -> int:
        """Raise confidence by one step, saturating at 100."""
        self.confidence = clamp_confidence(self.confidence + CORRECT_ANSWER_REWARD)
        return self.confidence

    def switch_to_next_style(self) -> LearningStyle:
        """
        Rotate to the next style and apply the switch penalty.

        Both fields are computed first and then assigned back to back, so
        no caller ever sees the new style with the old confidence.

        Returns:
            The newly assigned style
        """
        new_style = self.current_style.next_style()
        new_confidence = clamp_confidence(self.confidence - STYLE_SWITCH_PENALTY)
        self.current_style = new_style
        self.confidence = new_confidence
        return new_style

    model_config = {
        "validate_assignment": True,
        "json_schema_extra": {
            "example": {
                "current_style": "visual",
                "confidence": 85,
            }
        },
    }
