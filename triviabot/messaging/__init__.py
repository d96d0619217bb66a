"""
Outbound chat messaging.

Usage:
    from triviabot.messaging import create_messenger

    messenger = create_messenger(settings, session)
    await messenger.send_text("hello")
"""

from .console import ConsoleMessenger
from .factory import create_messenger
from .groupme.client import GroupMeMessenger

__all__ = ["ConsoleMessenger", "GroupMeMessenger", "create_messenger"]
