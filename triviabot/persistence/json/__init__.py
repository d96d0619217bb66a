"""
JSON file-based document store.

Persistent storage using one JSON file per document under DATA_DIR.
Suitable for single-process deployments.
"""

from .document_store import JSONDocumentStore

__all__ = ["JSONDocumentStore"]
