"""Generation client - study aids and quiz batches from a chat model, with retries."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from langchain_aws import ChatBedrock
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import ValidationError

from learnmate.config.settings import Settings, get_settings
from learnmate.errors import GenerationUnavailable, MalformedResponse
from learnmate.models.profile import LearningStyle
from learnmate.models.quiz import QuizBatch
from learnmate.models.study_aid import Source, StudyAidResult

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]

STUDY_AID_PROMPTS: dict[LearningStyle, str] = {
    LearningStyle.VISUAL: """You are an expert tutor creating a structured study guide for a visual learner.

Your output MUST be formatted using markdown to emphasize visual structure:
- Use bullet points, numbered lists, tables, and clear headings
- For every main concept, suggest a simple visual representation (a flowchart,
  diagram, or mind-map structure) that the learner can draw""",
    LearningStyle.PRACTICAL: """You are an expert tutor creating a practical study guide focused on application for a hands-on learner.

Your output MUST include:
- At least three detailed, real-world examples or case studies that demonstrate
  how the core concepts are used in practice
- A short practice scenario or question at the end""",
    LearningStyle.CONCEPTUAL: """You are an expert tutor creating a conceptual study guide for a learner who thrives on understanding deep theories.

Your output MUST:
- Clearly define the underlying principles
- Explain the relationships between the main ideas, using strong analogies if possible
- Explain the 'why' behind the facts""",
}

QUIZ_SYSTEM_PROMPT = """You are an expert quiz question writer. Create multiple-choice questions that test understanding of a study aid.

Requirements:
- Each question must have exactly 4 options
- Only ONE option should be correct; give its zero-based index (0-3)
- Incorrect options should be plausible but clearly wrong
- Questions should be clear and unambiguous
- For every question write three explanations of the correct answer:
  - visual: describe a diagram, chart, or mental picture
  - practical: walk through a concrete real-world example
  - conceptual: state the underlying principle and why it holds"""


def create_chat_model(settings: Settings) -> BaseChatModel:
    """Build the Bedrock chat model described by the settings."""
    return ChatBedrock(
        model=settings.model_name,
        temperature=settings.default_temperature,
        region_name=settings.aws_default_region,
    )


class GenerationClient:
    """
    Talks to the generative model on behalf of the study pipeline.

    Every request goes through request_with_backoff, which retries transport
    failures (anything the chat model raises) with exponential backoff.
    Responses that arrive but have the wrong shape raise MalformedResponse
    and are never retried.
    """

    def __init__(
        self,
        llm: BaseChatModel | None = None,
        settings: Settings | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """
        Initialize the client.

        Args:
            llm: Chat model to use (default: ChatBedrock built from settings)
            settings: Settings to read limits from (default: get_settings())
            sleep: Awaitable sleep used between attempts
        """
        self.settings = settings or get_settings()
        self._llm = llm
        self._sleep = sleep

    @property
    def llm(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = create_chat_model(self.settings)
        return self._llm

    @property
    def max_attempts(self) -> int:
        return self.settings.max_generation_attempts

    def backoff_delay(self, retry: int) -> float:
        """Seconds to wait before retry number `retry` (1-based): 2, 4, 8, ..."""
        return self.settings.backoff_base_seconds**retry

    async def request_with_backoff(
        self,
        messages: list,
        schema: type | None = None,
    ) -> Any:
        """
        Invoke the model, retrying transport failures.

        Args:
            messages: Chat messages to send
            schema: Optional pydantic model for structured output. When given,
                the raw response and parse result are returned together
                (include_raw) so parse errors do not look like transport errors.

        Returns:
            The chat model's response (an AIMessage, or the include_raw dict)

        Raises:
            GenerationUnavailable: After every attempt failed
        """
        if schema is None:
            runnable = self.llm
        else:
            runnable = self.llm.with_structured_output(schema, include_raw=True)

        last_error: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await runnable.ainvoke(messages)
            except Exception as e:
                last_error = e
                logger.warning(
                    f"Generation attempt {attempt}/{self.max_attempts} failed: {e}"
                )
                if attempt < self.max_attempts:
                    delay = self.backoff_delay(attempt)
                    logger.info(f"Retrying in {delay:g}s...")
                    await self._sleep(delay)

        logger.error(f"Generation failed after {self.max_attempts} attempts: {last_error}")
        raise GenerationUnavailable(self.max_attempts, last_error) from last_error

    async def generate_study_aid(
        self, content: str, style: LearningStyle
    ) -> StudyAidResult:
        """
        Generate a study aid for the given material and learning style.

        Args:
            content: Extracted study material
            style: Learning style to tailor the aid to

        Returns:
            StudyAidResult with text and attributed sources

        Raises:
            GenerationUnavailable: If the service stayed unreachable
            MalformedResponse: If the response has no text
        """
        style = LearningStyle(style)
        user_prompt = (
            f"Based on the following study material, create a personalized study aid "
            f"for a {style.value} learner. The content should focus on key concepts "
            f"and actionable learning points.\n\nMaterial to study:\n{content}"
        )
        messages = [
            SystemMessage(content=STUDY_AID_PROMPTS[style]),
            HumanMessage(content=user_prompt),
        ]

        response = await self.request_with_backoff(messages)

        text = extract_text(response)
        if not text:
            logger.error("Study aid response did not contain any text")
            raise MalformedResponse("Invalid response structure: no study aid text returned")

        return StudyAidResult(text=text, sources=extract_sources(response))

    async def generate_quiz_batch(self, context: str) -> QuizBatch:
        """
        Generate a batch of quiz questions about a study aid.

        Args:
            context: Study aid text the questions should cover

        Returns:
            Parsed QuizBatch

        Raises:
            GenerationUnavailable: If the service stayed unreachable
            MalformedResponse: If the response does not parse into questions
        """
        count = self.settings.quiz_question_count
        user_prompt = f"""Generate exactly {count} multiple-choice questions about this study material:

{context}

Generate exactly {count} high-quality questions, each with exactly 4 options."""

        messages = [
            SystemMessage(content=QUIZ_SYSTEM_PROMPT),
            HumanMessage(content=user_prompt),
        ]

        result = await self.request_with_backoff(messages, schema=QuizBatch)
        return parse_quiz_batch(result)


def extract_text(message: Any) -> str | None:
    """
    Pull the text out of a chat model response.

    Handles plain string content and content given as a list of blocks.

    Returns:
        The text, or None if the response carries none
    """
    content = getattr(message, "content", None)
    if isinstance(content, str):
        return content or None
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text") or "")
        text = "".join(parts)
        return text or None
    return None


def extract_sources(message: Any) -> list[Source]:
    """
    Collect source attributions from a response's metadata.

    Attributions missing either the uri or the title are dropped.

    Returns:
        List of sources, possibly empty
    """
    metadata = getattr(message, "response_metadata", None) or {}
    grounding = metadata.get("grounding_metadata") or {}

    attributions = (
        grounding.get("grounding_attributions")
        or grounding.get("grounding_chunks")
        or metadata.get("citations")
        or []
    )

    sources = []
    for attribution in attributions:
        if not isinstance(attribution, dict):
            continue
        web = attribution.get("web") or attribution
        uri = web.get("uri")
        title = web.get("title")
        if uri and title:
            sources.append(Source(uri=uri, title=title))
    return sources


def parse_quiz_batch(result: Any) -> QuizBatch:
    """
    Turn an include_raw structured output result into a QuizBatch.

    Raises:
        MalformedResponse: If parsing failed, nothing was parsed, or the
            batch holds no questions
    """
    if not isinstance(result, dict):
        raise MalformedResponse("Quiz response is not a structured result")

    parsing_error = result.get("parsing_error")
    if parsing_error is not None:
        logger.error(f"Quiz response failed to parse: {parsing_error}")
        cause = parsing_error if isinstance(parsing_error, BaseException) else None
        raise MalformedResponse(f"Quiz response failed to parse: {parsing_error}") from cause

    parsed = result.get("parsed")
    if parsed is None:
        raise MalformedResponse("Quiz response contained no questions")

    if isinstance(parsed, QuizBatch):
        batch = parsed
    else:
        try:
            batch = QuizBatch.model_validate(parsed)
        except ValidationError as e:
            raise MalformedResponse(f"Quiz response has the wrong shape: {e}") from e

    if not batch.questions:
        raise MalformedResponse("Quiz response contained no questions")

    return batch
