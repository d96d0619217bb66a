"""
triviabot persistence layer.

Whole-document stores for the current round and the points table.

Usage:
    from triviabot.persistence import create_document_store

    store = create_document_store("json", "./data")
"""

from ..domain.interfaces.document_store import IDocumentStore
from .store_factory import create_document_store

__all__ = ["IDocumentStore", "create_document_store"]
