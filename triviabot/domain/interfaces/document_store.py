"""
Document store interface.

Whole-document persistence keyed by name. Every read returns the complete
document and every write replaces it, so callers follow a
read-before-use / write-after-mutate contract.
"""

from abc import ABC, abstractmethod
from typing import Any


class IDocumentStore(ABC):
    """Load/save-by-key storage for JSON-compatible documents."""

    @abstractmethod
    async def load(self, key: str) -> Any | None:
        """
        Load a document.

        Missing or unreadable documents return None instead of raising.

        Args:
            key: Document name

        Returns:
            The stored document, or None
        """
        pass

    @abstractmethod
    async def save(self, key: str, document: Any) -> None:
        """
        Replace a document.

        Raises:
            PersistenceWriteError: If the document could not be written
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Remove a document. Deleting a missing document is not an error.

        Raises:
            PersistenceWriteError: If the document could not be removed
        """
        pass
