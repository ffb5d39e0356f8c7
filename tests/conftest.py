"""Shared test fixtures and configuration for pytest."""

import asyncio
from pathlib import Path
from typing import Any

import pytest
from langchain_core.messages import AIMessage

from learnmate.agents.generator import GenerationClient
from learnmate.config.settings import Settings
from learnmate.engine.quiz_engine import QuizEngine
from learnmate.io.notifier import Notifier
from learnmate.io.profile_store import InMemoryProfileStore
from learnmate.models.profile import LearningStyle, ProfileState
from learnmate.models.quiz import QuizBatch, QuizQuestion, StyleExplanations


class FakeChatModel:
    """Chat model stand-in that replays scripted responses.

    A response that is an exception instance is raised instead of returned.
    """

    def __init__(self, responses: list[Any]):
        self.responses = list(responses)
        self.calls: list[list] = []
        self.structured_calls: list[tuple[type, bool]] = []

    async def ainvoke(self, messages: list) -> Any:
        self.calls.append(messages)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def with_structured_output(self, schema: type, include_raw: bool = False):
        self.structured_calls.append((schema, include_raw))
        return self


class BlockingChatModel(FakeChatModel):
    """Fake chat model that waits for `release` before answering."""

    def __init__(self, responses: list[Any]):
        super().__init__(responses)
        self.release = asyncio.Event()

    async def ainvoke(self, messages: list) -> Any:
        await self.release.wait()
        return await super().ainvoke(messages)


class RecordingSleep:
    """Async sleep replacement that only records the requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FakeExtractor:
    """Extractor returning canned text, or raising a canned error."""

    def __init__(self, text: str = "Photosynthesis turns light into chemical energy.", error: Exception | None = None):
        self.text = text
        self.error = error
        self.extracted: list[str] = []

    def extract(self, path: str | Path) -> str:
        self.extracted.append(str(path))
        if self.error is not None:
            raise self.error
        return self.text


class RecordingNotifier(Notifier):
    """Notifier that keeps every event for later assertions."""

    def __init__(self):
        self.events: list[tuple] = []

    def files_selected(self, count: int) -> None:
        self.events.append(("files_selected", count))

    def generation_started(self) -> None:
        self.events.append(("generation_started",))

    def generation_succeeded(self) -> None:
        self.events.append(("generation_succeeded",))

    def generation_failed(self, message: str) -> None:
        self.events.append(("generation_failed", message))

    def answer_correct(self) -> None:
        self.events.append(("answer_correct",))

    def answer_incorrect(self, streak: int) -> None:
        self.events.append(("answer_incorrect", streak))

    def style_switched(self, new_style: LearningStyle) -> None:
        self.events.append(("style_switched", new_style))

    def quiz_completed(self, score: int, total: int) -> None:
        self.events.append(("quiz_completed", score, total))

    def names(self) -> list[str]:
        return [event[0] for event in self.events]


def make_question(number: int, correct_answer_index: int = 0) -> QuizQuestion:
    """Build a valid question whose explanations name their style."""
    return QuizQuestion(
        question=f"Question {number}: which option is correct?",
        options=[f"Option {number}{letter}" for letter in "ABCD"],
        correct_answer_index=correct_answer_index,
        explanations=StyleExplanations(
            visual=f"Visual explanation {number}",
            practical=f"Practical explanation {number}",
            conceptual=f"Conceptual explanation {number}",
        ),
    )


def wrong_answer(question: QuizQuestion) -> int:
    return (question.correct_answer_index + 1) % 4


@pytest.fixture
def settings() -> Settings:
    """Default settings (3 attempts, 2s backoff base, 5 questions, confidence 85)."""
    return Settings()


@pytest.fixture
def sample_question() -> QuizQuestion:
    """Create a sample question for testing."""
    return QuizQuestion(
        question="What is the powerhouse of the cell?",
        options=["Nucleus", "Mitochondria", "Ribosome", "Golgi apparatus"],
        correct_answer_index=1,
        explanations=StyleExplanations(
            visual="Picture the cell as a city: the mitochondria are its power plants.",
            practical="Muscle cells, which burn a lot of energy, are packed with mitochondria.",
            conceptual="Mitochondria perform cellular respiration, turning glucose into ATP.",
        ),
    )


@pytest.fixture
def sample_batch() -> QuizBatch:
    """A batch of five questions with varied correct answers."""
    return QuizBatch(questions=[make_question(i + 1, i % 4) for i in range(5)])


@pytest.fixture
def profile() -> ProfileState:
    return ProfileState(current_style=LearningStyle.VISUAL, confidence=85)


@pytest.fixture
def store() -> InMemoryProfileStore:
    return InMemoryProfileStore(LearningStyle.VISUAL)


@pytest.fixture
def engine(profile: ProfileState, store: InMemoryProfileStore) -> QuizEngine:
    return QuizEngine(profile, store)


@pytest.fixture
def loaded_engine(engine: QuizEngine, sample_batch: QuizBatch) -> QuizEngine:
    engine.load_batch(sample_batch)
    return engine


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def study_aid_message() -> AIMessage:
    """A successful study aid response with one complete source."""
    return AIMessage(
        content="# Photosynthesis\n\n- Light reactions\n- Calvin cycle",
        response_metadata={
            "grounding_metadata": {
                "grounding_attributions": [
                    {"web": {"uri": "https://example.org/photosynthesis", "title": "Photosynthesis"}},
                ]
            }
        },
    )


def quiz_result(batch: QuizBatch) -> dict[str, Any]:
    """Shape of a structured output call made with include_raw=True."""
    return {"raw": AIMessage(content=""), "parsed": batch, "parsing_error": None}


def make_client(llm: FakeChatModel, settings: Settings, sleep: RecordingSleep) -> GenerationClient:
    return GenerationClient(llm=llm, settings=settings, sleep=sleep)
