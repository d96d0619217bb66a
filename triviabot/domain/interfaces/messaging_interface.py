"""
Messaging interface for posting to the chat.

The trivia round only ever needs to post plain text to the one group the bot
lives in, so the contract is a single send_text operation.
"""

from abc import ABC, abstractmethod

from triviabot.domain.models import MessageResult


class IMessenger(ABC):
    """
    Notifier used by the trivia round.

    Implementations deliver best-effort: transport failures are logged and
    reported through MessageResult, never raised.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier of the transport (e.g. "groupme", "console")."""
        pass

    @abstractmethod
    async def send_text(self, text: str) -> MessageResult:
        """Post a text message to the chat.

        Args:
            text: Message body

        Returns:
            MessageResult with success status
        """
        pass
