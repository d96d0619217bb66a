"""
GroupMe bot API client.

Posts text as the configured bot. The aiohttp session is injected (created
once in the FastAPI lifespan) and never created here.
"""

from typing import Any

import aiohttp

from triviabot.core.logging.logger import get_logger
from triviabot.domain.interfaces.messaging_interface import IMessenger
from triviabot.domain.models import MessageResult

# GroupMe rejects bot posts longer than this
MAX_TEXT_LENGTH = 1000


class GroupMeUrlBuilder:
    """Builds URLs for GroupMe API endpoints."""

    def __init__(self, base_url: str, access_token: str):
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token

    def get_bot_post_url(self) -> str:
        return f"{self.base_url}/bots/post?token={self.access_token}"


class GroupMeMessenger(IMessenger):
    """
    Posts messages to a GroupMe group through a bot.

    Delivery is best-effort: HTTP and network failures are logged and
    returned as an unsuccessful MessageResult, never raised.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        access_token: str,
        bot_id: str,
        group_id: str | None = None,
        base_url: str = "https://api.groupme.com/v3",
        logger: Any | None = None,
    ):
        self.session = session
        self.access_token = access_token
        self.bot_id = bot_id
        self.group_id = group_id
        self.url_builder = GroupMeUrlBuilder(base_url, access_token)
        self.logger = logger or get_logger(__name__)

        self.logger.info(f"GroupMe messenger initialized for bot {bot_id}")

    @property
    def name(self) -> str:
        return "groupme"

    async def send_text(self, text: str) -> MessageResult:
        if len(text) > MAX_TEXT_LENGTH:
            text = text[: MAX_TEXT_LENGTH - 3] + "..."

        payload = {"text": text, "bot_id": self.bot_id}
        url = self.url_builder.get_bot_post_url()

        try:
            async with self.session.post(url, json=payload) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    if response.status == 401:
                        self.logger.error(
                            "GroupMe rejected the access token (401). "
                            "Update GROUPME_ACCESS_TOKEN."
                        )
                    else:
                        self.logger.error(
                            f"GroupMe post failed: {response.status} - {error_text}"
                        )
                    return MessageResult(
                        success=False,
                        error=error_text or response.reason,
                        error_code=str(response.status),
                    )

                self.logger.debug(f"Posted to GroupMe: {text!r}")
                return MessageResult(success=True)

        except (aiohttp.ClientError, TimeoutError) as e:
            self.logger.error(f"GroupMe post failed: {e}")
            return MessageResult(
                success=False, error=str(e), error_code=type(e).__name__
            )
