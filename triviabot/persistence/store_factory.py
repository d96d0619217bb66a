"""
Document store selector for triviabot.

Provides store construction based on the configured backend.
"""

from pathlib import Path

from ..domain.interfaces.document_store import IDocumentStore


def create_document_store(backend: str, data_dir: str | Path) -> IDocumentStore:
    """
    Create a document store for the given backend.

    Args:
        backend: "json" (durable files under data_dir) or "memory"
        data_dir: Directory for JSON documents

    Returns:
        Document store instance

    Raises:
        ValueError: If backend is not supported
    """
    if backend == "json":
        from .json.document_store import JSONDocumentStore

        return JSONDocumentStore(data_dir)

    elif backend == "memory":
        from .memory.document_store import MemoryDocumentStore

        return MemoryDocumentStore()

    else:
        raise ValueError(
            f"Unsupported store backend: {backend}. Supported backends: json, memory"
        )
