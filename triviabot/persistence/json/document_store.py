"""
JSON document store - one file per document key.

Provides whole-document persistence for the round state and the points table
using the atomic FileManager.
"""

import logging
from pathlib import Path
from typing import Any

from triviabot.core.exceptions import PersistenceReadError
from triviabot.domain.interfaces.document_store import IDocumentStore

from .file_manager import FileManager
from .serialization import create_document, extract_document

logger = logging.getLogger("JSONDocumentStore")


class JSONDocumentStore(IDocumentStore):
    """
    File-backed document store.

    Read failures fall back to "no document" and are logged; write failures
    propagate as PersistenceWriteError so the caller can abort.
    """

    def __init__(self, data_dir: str | Path):
        self.file_manager = FileManager(data_dir)
        self.file_manager.ensure_data_directory()

    @property
    def data_dir(self) -> Path:
        return self.file_manager.data_dir

    async def load(self, key: str) -> Any | None:
        file_path = self.file_manager.get_file_path(key)
        try:
            file_data = await self.file_manager.read_file(file_path)
        except PersistenceReadError as e:
            logger.warning(f"Treating '{key}' as empty: {e}")
            return None

        if file_data is None:
            return None
        return extract_document(file_data)

    async def save(self, key: str, document: Any) -> None:
        file_path = self.file_manager.get_file_path(key)
        await self.file_manager.write_file(file_path, create_document(document))
        logger.debug(f"Saved document '{key}' to {file_path}")

    async def delete(self, key: str) -> None:
        file_path = self.file_manager.get_file_path(key)
        await self.file_manager.delete_file(file_path)
        logger.debug(f"Deleted document '{key}'")
