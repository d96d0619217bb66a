"""
Messenger selection.

DEV prints to the console, PROD posts through the GroupMe bot API.
"""

import aiohttp

from triviabot.core.config.settings import Settings
from triviabot.domain.interfaces.messaging_interface import IMessenger

from .console import ConsoleMessenger
from .groupme.client import GroupMeMessenger


def create_messenger(settings: Settings, session: aiohttp.ClientSession) -> IMessenger:
    """Build the messenger matching the execution mode."""
    if settings.is_development:
        return ConsoleMessenger()

    return GroupMeMessenger(
        session=session,
        access_token=settings.groupme_access_token,
        bot_id=settings.groupme_bot_id,
        group_id=settings.groupme_group_id,
        base_url=settings.groupme_api_url,
    )
