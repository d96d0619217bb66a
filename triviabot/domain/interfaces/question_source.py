"""
Question source interface.
"""

from abc import ABC, abstractmethod

from triviabot.domain.models import QuestionRecord


class IQuestionSource(ABC):
    """Supplies the next question/answer pair for a round."""

    @property
    @abstractmethod
    def mode(self) -> str:
        """Source strategy name ("corpus" or "remote")."""
        pass

    @abstractmethod
    async def next(self) -> QuestionRecord:
        """
        Draw the next question.

        Raises:
            SourceExhausted: No questions left (corpus mode)
            ProviderError: The provider failed or kept returning blank questions
        """
        pass
