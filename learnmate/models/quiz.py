"""Pydantic models for quiz data structures."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from learnmate.models.profile import LearningStyle

OPTION_COUNT = 4


class QuizStatus(str, Enum):
    """Where the current question is in its answer cycle."""

    UNANSWERED = "unanswered"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    COMPLETED = "completed"


class StyleExplanations(BaseModel):
    """One explanation of the correct answer per learning style."""

    visual: str = Field(
        ...,
        min_length=1,
        description="Explanation for a visual learner: describe a diagram, chart, or picture",
    )
    practical: str = Field(
        ...,
        min_length=1,
        description="Explanation for a practical learner: use a concrete real-world example",
    )
    conceptual: str = Field(
        ...,
        min_length=1,
        description="Explanation for a conceptual learner: state the underlying principle",
    )

    def for_style(self, style: LearningStyle) -> str:
        return getattr(self, LearningStyle(style).value)


class QuizQuestion(BaseModel):
    """A single multiple choice question with style-specific explanations."""

    question: str = Field(..., min_length=1, description="The question text")
    options: list[str] = Field(
        ...,
        min_length=OPTION_COUNT,
        max_length=OPTION_COUNT,
        description="Exactly four answer options",
    )
    correct_answer_index: int = Field(
        ...,
        ge=0,
        le=OPTION_COUNT - 1,
        description="Zero-based index of the correct option",
    )
    explanations: StyleExplanations = Field(
        ...,
        description="Why the correct answer is correct, once per learning style",
    )

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: list[str]) -> list[str]:
        """Ensure no option is blank."""
        for i, value in enumerate(v):
            if not value or not value.strip():
                raise ValueError(f"Option {i} cannot be empty")
        return v

    def explanation_for(self, style: LearningStyle) -> str:
        """Get the explanation written for a learning style."""
        return self.explanations.for_style(style)

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_answer_index]

    model_config = {
        "json_schema_extra": {
            "example": {
                "question": "What is the powerhouse of the cell?",
                "options": ["Nucleus", "Mitochondria", "Ribosome", "Golgi apparatus"],
                "correct_answer_index": 1,
                "explanations": {
                    "visual": "Picture the cell as a city: the mitochondria are its power plants.",
                    "practical": "Muscle cells, which burn a lot of energy, are packed with mitochondria.",
                    "conceptual": "Mitochondria perform cellular respiration, turning glucose into ATP.",
                },
            }
        }
    }


class QuizBatch(BaseModel):
    """Questions generated together from one study aid."""

    questions: list[QuizQuestion] = Field(
        ...,
        description="List of generated quiz questions",
    )

    @property
    def question_count(self) -> int:
        """Get the number of questions in this batch."""
        return len(self.questions)

    def __len__(self) -> int:
        return len(self.questions)

    model_config = {"frozen": True}


class QuizSession(BaseModel):
    """Runtime state of one pass through a quiz batch."""

    batch: QuizBatch
    position: int = Field(default=0, ge=0)
    status: QuizStatus = QuizStatus.UNANSWERED
    selected_option_index: int | None = None
    consecutive_incorrect: int = Field(default=0, ge=0)
    score: int = Field(default=0, ge=0)

    @property
    def current_question(self) -> QuizQuestion:
        return self.batch.questions[self.position]

    @property
    def is_last_question(self) -> bool:
        return self.position == len(self.batch) - 1


class StyleSwitch(BaseModel):
    """Emitted when a streak of misses moved the learner to another style."""

    previous_style: LearningStyle
    new_style: LearningStyle
    confidence: int = Field(..., ge=0, le=100)


class AdvanceResult(BaseModel):
    """Outcome of moving past an answered question."""

    status: QuizStatus
    position: int
    style_switch: StyleSwitch | None = None

    @property
    def completed(self) -> bool:
        return self.status == QuizStatus.COMPLETED


class Explanation(BaseModel):
    """Explanation picked for an incorrect answer."""

    style: LearningStyle
    text: str
