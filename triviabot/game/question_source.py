"""
Question sources: a static corpus drawn without replacement, or a remote
random-question provider polled under a bounded retry policy.
"""

from __future__ import annotations

import asyncio
import html
import json
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import aiohttp
from pydantic import ValidationError

from triviabot.core.exceptions import ConfigurationMissing, ProviderError, SourceExhausted
from triviabot.core.logging.logger import get_logger
from triviabot.domain.interfaces.question_source import IQuestionSource
from triviabot.domain.models import QuestionRecord

logger = get_logger(__name__)


class CorpusQuestionSource(IQuestionSource):
    """
    Draws questions at random from a fixed corpus, without replacement.

    When the corpus runs dry the exhaustion policy decides what happens:
    "reset" refills it from the original records, "fail" raises
    SourceExhausted.
    """

    def __init__(
        self,
        records: list[QuestionRecord],
        on_exhausted: str = "reset",
        rng: random.Random | None = None,
    ):
        if on_exhausted not in ("reset", "fail"):
            raise ValueError("on_exhausted must be 'reset' or 'fail'")

        self._records = list(records)
        self._remaining = list(records)
        self.on_exhausted = on_exhausted
        self._rng = rng or random.Random()

    @property
    def mode(self) -> str:
        return "corpus"

    @property
    def remaining(self) -> int:
        return len(self._remaining)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        on_exhausted: str = "reset",
        rng: random.Random | None = None,
    ) -> CorpusQuestionSource:
        """
        Load a corpus from a JSON file.

        The file holds a list of objects with ``Q``/``A`` or
        ``question``/``answer`` keys. Blank or malformed entries are skipped.

        Raises:
            ConfigurationMissing: If the file is unreadable or holds no usable questions
        """
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ConfigurationMissing(f"Cannot load questions file {path}: {e}") from e

        if isinstance(raw, dict):
            raw = raw.get("questions", [])
        if not isinstance(raw, list):
            raise ConfigurationMissing(f"Questions file {path} must hold a list")

        records = []
        skipped = 0
        for entry in raw:
            try:
                records.append(QuestionRecord.model_validate(entry))
            except ValidationError:
                skipped += 1

        if skipped:
            logger.warning(f"Skipped {skipped} malformed questions in {path}")
        if not records:
            raise ConfigurationMissing(f"Questions file {path} has no usable questions")

        logger.info(f"Loaded {len(records)} questions from {path}")
        return cls(records, on_exhausted=on_exhausted, rng=rng)

    async def next(self) -> QuestionRecord:
        if not self._remaining:
            if self.on_exhausted == "fail" or not self._records:
                raise SourceExhausted("All questions have been asked")
            logger.info(f"Corpus exhausted, reshuffling {len(self._records)} questions")
            self._remaining = list(self._records)

        index = self._rng.randrange(len(self._remaining))
        return self._remaining.pop(index)


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry for providers that sometimes return blank questions."""

    max_attempts: int = 5
    delay_seconds: float = 0.5

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")


class RemoteQuestionSource(IQuestionSource):
    """
    Fetches one random question per request from a remote provider.

    The provider answers ``GET url`` with a list whose first element carries
    ``question`` and ``answer`` strings. Blank or malformed responses are
    retried under the RetryPolicy; transport failures are not.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        url: str,
        retry_policy: RetryPolicy | None = None,
    ):
        self.session = session
        self.url = url
        self.retry_policy = retry_policy or RetryPolicy()

    @property
    def mode(self) -> str:
        return "remote"

    async def _fetch(self) -> Any:
        try:
            async with self.session.get(self.url) as response:
                response.raise_for_status()
                return await response.json(content_type=None)
        except aiohttp.ClientResponseError as e:
            raise ProviderError(f"Question provider returned HTTP {e.status}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ProviderError(f"Question provider unreachable: {e}") from e
        except ValueError as e:
            raise ProviderError(f"Question provider sent invalid JSON: {e}") from e

    @staticmethod
    def _parse(payload: Any) -> QuestionRecord | None:
        """Extract a usable record from a provider response, or None."""
        if not isinstance(payload, list) or not payload:
            return None
        first = payload[0]
        if not isinstance(first, dict):
            return None

        prompt = first.get("question")
        answer = first.get("answer")
        if not isinstance(prompt, str) or not isinstance(answer, str):
            return None

        try:
            return QuestionRecord(
                prompt=html.unescape(prompt), answer=html.unescape(answer)
            )
        except ValidationError:
            return None

    async def next(self) -> QuestionRecord:
        policy = self.retry_policy
        for attempt in range(1, policy.max_attempts + 1):
            record = self._parse(await self._fetch())
            if record is not None:
                return record

            logger.warning(
                f"Blank question from provider (attempt {attempt}/{policy.max_attempts})"
            )
            if attempt < policy.max_attempts and policy.delay_seconds:
                await asyncio.sleep(policy.delay_seconds)

        raise ProviderError(
            f"No usable question after {policy.max_attempts} attempts from {self.url}"
        )
