"""
Pytest configuration and common fixtures for triviabot tests.

Provides a controllable clock, a recording messenger, document stores and a
small seeded corpus so game tests are deterministic.
"""

import random
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from triviabot.core.config.settings import Settings
from triviabot.domain.interfaces.messaging_interface import IMessenger
from triviabot.domain.models import MessageResult, QuestionRecord
from triviabot.game.question_source import CorpusQuestionSource
from triviabot.game.round_state import RoundStateRepository
from triviabot.game.score_store import ScoreStore
from triviabot.game.trivia_round import TriviaRound
from triviabot.persistence.json.document_store import JSONDocumentStore
from triviabot.persistence.memory.document_store import MemoryDocumentStore

START_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = START_TIME):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingMessenger(IMessenger):
    """Messenger that remembers every message instead of posting it."""

    def __init__(self, success: bool = True):
        self.sent: list[str] = []
        self.success = success

    @property
    def name(self) -> str:
        return "recording"

    async def send_text(self, text: str) -> MessageResult:
        self.sent.append(text)
        return MessageResult(success=self.success)


def make_response(status: int = 200, json_data=None, text: str = "") -> MagicMock:
    """Fake aiohttp response usable inside ``async with``."""
    response = MagicMock()
    response.status = status
    response.reason = "Error" if status >= 400 else "OK"
    response.json = AsyncMock(return_value=json_data)
    response.text = AsyncMock(return_value=text)

    if status >= 400:
        response.raise_for_status = MagicMock(
            side_effect=aiohttp.ClientResponseError(
                request_info=MagicMock(), history=(), status=status
            )
        )
    else:
        response.raise_for_status = MagicMock()
    return response


def make_session(*responses, method: str = "get") -> MagicMock:
    """Fake aiohttp session whose ``method`` yields ``responses`` in order.

    An exception instance in ``responses`` is raised by that call instead.
    """
    session = MagicMock()
    effects = []
    for response in responses:
        if isinstance(response, BaseException):
            effects.append(response)
            continue
        context = MagicMock()
        context.__aenter__ = AsyncMock(return_value=response)
        context.__aexit__ = AsyncMock(return_value=False)
        effects.append(context)
    getattr(session, method).side_effect = effects
    return session


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def messenger() -> RecordingMessenger:
    return RecordingMessenger()


@pytest.fixture
def memory_store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def json_store(tmp_path) -> JSONDocumentStore:
    return JSONDocumentStore(tmp_path / "data")


@pytest.fixture
def sample_records() -> list[QuestionRecord]:
    return [
        QuestionRecord(prompt="What is the capital of France?", answer="Paris"),
        QuestionRecord(prompt="Which planet is the Red Planet?", answer="Mars"),
        QuestionRecord(prompt="What is the largest ocean?", answer="The Pacific Ocean"),
    ]


@pytest.fixture
def paris_source() -> CorpusQuestionSource:
    """Corpus with a single question whose answer is Paris."""
    return CorpusQuestionSource(
        [QuestionRecord(prompt="What is the capital of France?", answer="Paris")]
    )


@pytest.fixture
def corpus_source(sample_records) -> CorpusQuestionSource:
    return CorpusQuestionSource(sample_records, rng=random.Random(7))


@pytest.fixture
def scores(memory_store) -> ScoreStore:
    return ScoreStore(memory_store)


@pytest.fixture
def round_state(memory_store) -> RoundStateRepository:
    return RoundStateRepository(memory_store)


@pytest.fixture
def trivia_round(paris_source, scores, round_state, messenger, clock) -> TriviaRound:
    return TriviaRound(
        question_source=paris_source,
        scores=scores,
        state=round_state,
        messenger=messenger,
        secs_to_answer=30,
        clock=clock,
    )


@pytest.fixture
def settings(monkeypatch, tmp_path) -> Settings:
    """Settings built from a clean test environment."""
    monkeypatch.setenv("ENVIRONMENT", "DEV")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("GROUPME_ACCESS_TOKEN", "test_token")
    monkeypatch.setenv("GROUPME_GROUP_ID", "test_group")
    monkeypatch.setenv("GROUPME_BOT_ID", "test_bot")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("SECS_TO_ANSWER", "30")
    monkeypatch.setenv("QUESTION_SOURCE", "corpus")
    monkeypatch.setenv("STORE_BACKEND", "json")
    monkeypatch.setenv("CORPUS_EXHAUSTION", "reset")
    monkeypatch.delenv("QUESTIONS_FILE", raising=False)
    return Settings()


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def session_factory():
    return make_session
