"""
Durable points table.

The whole mapping is loaded before every operation and written back whole
after every change, so a fresh process always sees the latest totals.
"""

from pydantic import ValidationError

from triviabot.core.logging.logger import get_logger
from triviabot.domain.interfaces.document_store import IDocumentStore
from triviabot.domain.models import ScoreRecord

logger = get_logger(__name__)

USER_POINTS_KEY = "user_points"


class ScoreStore:
    """Points per user, backed by a single document."""

    def __init__(self, store: IDocumentStore, key: str = USER_POINTS_KEY):
        self.store = store
        self.key = key

    async def all_points(self) -> ScoreRecord:
        """Load the full table. Missing or corrupt documents read as empty."""
        document = await self.store.load(self.key)
        if document is None:
            return ScoreRecord()
        try:
            return ScoreRecord.model_validate(document)
        except ValidationError as e:
            logger.warning(f"Ignoring corrupt points table: {e.error_count()} errors")
            return ScoreRecord()

    async def points_for(self, user_id: str) -> int:
        return (await self.all_points()).points_for(user_id)

    async def add_points(self, user_id: str, amount: int) -> int:
        """
        Add ``amount`` points to ``user_id`` and persist the table.

        Returns:
            The user's new total

        Raises:
            ValueError: If amount is negative
            PersistenceWriteError: If the table could not be saved
        """
        record = (await self.all_points()).with_points(user_id, amount)
        await self.store.save(self.key, record)
        total = record.points_for(user_id)
        logger.info(f"Awarded {amount} point(s) to {user_id}, total {total}")
        return total
