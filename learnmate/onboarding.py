"""Learning style survey used to pick a new learner's starting style."""

from pydantic import BaseModel, Field

from learnmate.models.profile import LearningStyle


class SurveyOption(BaseModel):
    style: LearningStyle
    label: str


class SurveyQuestion(BaseModel):
    id: int
    question: str
    options: list[SurveyOption] = Field(..., min_length=1)


def _question(id: int, question: str, visual: str, practical: str, conceptual: str) -> SurveyQuestion:
    return SurveyQuestion(
        id=id,
        question=question,
        options=[
            SurveyOption(style=LearningStyle.VISUAL, label=visual),
            SurveyOption(style=LearningStyle.PRACTICAL, label=practical),
            SurveyOption(style=LearningStyle.CONCEPTUAL, label=conceptual),
        ],
    )


SURVEY_QUESTIONS: list[SurveyQuestion] = [
    _question(
        1,
        "When learning new material, what helps you most?",
        "Diagrams, charts, and visual representations",
        "Real-world examples and hands-on practice",
        "Understanding theories and underlying principles",
    ),
    _question(
        2,
        "How do you prefer to study?",
        "Creating mind maps and color-coded notes",
        "Working through practice problems and case studies",
        "Reading in-depth and making theoretical connections",
    ),
    _question(
        3,
        "What frustrates you most about current study materials?",
        "Too much text, not enough visual aids",
        "Too abstract, lacking practical applications",
        "Too surface-level, missing deeper explanations",
    ),
    _question(
        4,
        "When you remember something well, it's usually because:",
        "I can picture it in my mind",
        "I applied it to something real",
        "I understood why it works",
    ),
    _question(
        5,
        "Your ideal study resource would include:",
        "Infographics, flowcharts, and visual summaries",
        "Step-by-step examples and practical exercises",
        "Detailed explanations and theoretical frameworks",
    ),
]


def score_survey(answers: list[LearningStyle]) -> LearningStyle:
    """
    Pick the style chosen most often.

    On a tie the style declared later wins (visual < practical < conceptual).

    Args:
        answers: The style behind each chosen option

    Returns:
        The winning style, or visual if there are no answers
    """
    if not answers:
        return LearningStyle.VISUAL

    counts = {style: 0 for style in LearningStyle}
    for answer in answers:
        counts[LearningStyle(answer)] += 1

    winner = LearningStyle.VISUAL
    for style, count in counts.items():
        if count >= counts[winner]:
            winner = style
    return winner
