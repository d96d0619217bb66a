"""
Domain models for the trivia game.

Pydantic schemas for question records, the persisted round state, the points
table and the inbound GroupMe callback.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    RootModel,
    field_validator,
)


def utc_now() -> datetime:
    """Default clock for the round state machine."""
    return datetime.now(timezone.utc)


class QuestionRecord(BaseModel):
    """A question/answer pair as supplied by a question source.

    Corpus files spell the fields either ``Q``/``A`` or ``question``/``answer``.
    """

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("prompt", "Q", "question")
    )
    answer: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("answer", "A")
    )

    @field_validator("prompt", "answer", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        # Some corpora store numeric answers ("1969") as numbers
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str):
            return value.strip()
        return value


class Question(BaseModel):
    """The current round: the question on the table and when it was asked.

    Frozen so ``issued_at`` cannot change once the round has started.
    """

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    issued_at: datetime

    @field_validator("issued_at")
    @classmethod
    def _ensure_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def issue(cls, record: QuestionRecord, now: datetime) -> Question:
        """Start a round for ``record`` at ``now``."""
        return cls(prompt=record.prompt, answer=record.answer, issued_at=now)

    def seconds_remaining(self, window: int, now: datetime) -> int:
        """Whole seconds left to answer, never negative. 0 means expired."""
        elapsed = (now - self.issued_at).total_seconds()
        return max(0, math.ceil(window - elapsed))


class ScoreRecord(RootModel[dict[str, NonNegativeInt]]):
    """Points per user id. Unknown users implicitly have 0 points."""

    root: dict[str, NonNegativeInt] = Field(default_factory=dict)

    def points_for(self, user_id: str) -> int:
        return self.root.get(str(user_id), 0)

    def with_points(self, user_id: str, amount: int) -> ScoreRecord:
        """Return a copy with ``amount`` added to ``user_id``."""
        if amount < 0:
            raise ValueError("amount must not be negative")
        points = dict(self.root)
        points[str(user_id)] = points.get(str(user_id), 0) + amount
        return ScoreRecord(points)


class InboundMessage(BaseModel):
    """GroupMe bot callback payload. Only the fields the game reads are typed."""

    model_config = ConfigDict(extra="ignore")

    text: str | None = None
    name: str | None = None
    user_id: str = ""
    sender_type: str | None = None
    group_id: str | None = None
    id: str | None = None

    @field_validator("user_id", "group_id", "id", mode="before")
    @classmethod
    def _stringify_ids(cls, value):
        if isinstance(value, int):
            return str(value)
        return value

    @property
    def is_from_bot(self) -> bool:
        return self.sender_type == "bot"


class MessageResult(BaseModel):
    """Result of a messaging operation."""

    success: bool
    message_id: str | None = None
    error: str | None = None
    error_code: str | None = None
    timestamp: datetime = Field(default_factory=utc_now)


class AnswerOutcome(Enum):
    """What a submitted answer did to the round."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    EXPIRED = "expired"
    NO_ROUND = "no_round"


@dataclass(frozen=True)
class RoundStatus:
    """Result of check_and_expire: whether a round is live and whether it just expired."""

    active: bool
    expired: bool = False
