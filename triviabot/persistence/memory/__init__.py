"""In-memory document store (not durable)."""

from .document_store import MemoryDocumentStore

__all__ = ["MemoryDocumentStore"]
