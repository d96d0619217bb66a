"""
Domain interfaces for the trivia game's external collaborators.
"""

from .document_store import IDocumentStore
from .messaging_interface import IMessenger
from .question_source import IQuestionSource

__all__ = ["IDocumentStore", "IMessenger", "IQuestionSource"]
