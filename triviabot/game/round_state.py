"""
Durable slot for the current round.

One deployment runs one round at a time, so the question lives under a single
fixed key and is either present or absent.
"""

from pydantic import ValidationError

from triviabot.core.logging.logger import get_logger
from triviabot.domain.interfaces.document_store import IDocumentStore
from triviabot.domain.models import Question

logger = get_logger(__name__)

CURRENT_QUESTION_KEY = "current_question"


class RoundStateRepository:
    """Loads and saves the current Question."""

    def __init__(self, store: IDocumentStore, key: str = CURRENT_QUESTION_KEY):
        self.store = store
        self.key = key

    async def load(self) -> Question | None:
        """Return the persisted question, or None when idle or unreadable."""
        document = await self.store.load(self.key)
        if not document:
            return None
        try:
            return Question.model_validate(document)
        except ValidationError as e:
            logger.warning(f"Ignoring corrupt round state: {e.error_count()} errors")
            return None

    async def save(self, question: Question | None) -> None:
        """Persist ``question``; None clears the slot."""
        if question is None:
            await self.store.delete(self.key)
        else:
            await self.store.save(self.key, question)
