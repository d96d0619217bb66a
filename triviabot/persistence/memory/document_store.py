"""
In-memory document store.

Not durable across restarts; used for tests and throwaway local runs. Values
are deep-copied on the way in and out so callers never share state with the
store.
"""

import asyncio
import copy
import logging
from typing import Any

from triviabot.domain.interfaces.document_store import IDocumentStore
from triviabot.persistence.json.serialization import serialize_for_json

logger = logging.getLogger("MemoryDocumentStore")


class MemoryDocumentStore(IDocumentStore):
    """Dictionary-backed document store with a single lock."""

    def __init__(self):
        self._documents: dict[str, Any] = {}
        self._lock = asyncio.Lock()

    async def load(self, key: str) -> Any | None:
        async with self._lock:
            if key not in self._documents:
                return None
            return copy.deepcopy(self._documents[key])

    async def save(self, key: str, document: Any) -> None:
        async with self._lock:
            self._documents[key] = copy.deepcopy(serialize_for_json(document))

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._documents.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._documents)
