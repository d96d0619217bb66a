"""
Tests for the GroupMe bot client, the console messenger and messenger selection.
"""

import io
import random

import aiohttp
import pytest
from rich.console import Console

from triviabot.core.config.settings import Settings
from triviabot.messaging.console import ConsoleMessenger
from triviabot.messaging.factory import create_messenger
from triviabot.messaging.groupme.client import (
    MAX_TEXT_LENGTH,
    GroupMeMessenger,
    GroupMeUrlBuilder,
)

POST_URL = "https://api.groupme.com/v3/bots/post?token=test_token"


def make_messenger(session):
    return GroupMeMessenger(session=session, access_token="test_token", bot_id="test_bot")


def test_url_builder_strips_trailing_slash():
    builder = GroupMeUrlBuilder("https://api.groupme.com/v3/", "abc")

    assert builder.get_bot_post_url() == "https://api.groupme.com/v3/bots/post?token=abc"


@pytest.mark.asyncio
async def test_send_text_posts_as_bot(session_factory, response_factory):
    session = session_factory(response_factory(status=202), method="post")

    result = await make_messenger(session).send_text("[Q] Capital of France?")

    assert result.success
    session.post.assert_called_once_with(
        POST_URL, json={"text": "[Q] Capital of France?", "bot_id": "test_bot"}
    )


@pytest.mark.asyncio
async def test_long_text_is_truncated(session_factory, response_factory):
    session = session_factory(response_factory(status=202), method="post")

    await make_messenger(session).send_text("x" * (MAX_TEXT_LENGTH + 50))

    sent = session.post.call_args.kwargs["json"]["text"]
    assert len(sent) == MAX_TEXT_LENGTH
    assert sent.endswith("...")


@pytest.mark.asyncio
async def test_http_error_is_reported(session_factory, response_factory):
    session = session_factory(
        response_factory(status=401, text="unauthorized"), method="post"
    )

    result = await make_messenger(session).send_text("hello")

    assert not result.success
    assert result.error == "unauthorized"
    assert result.error_code == "401"


@pytest.mark.asyncio
async def test_network_error_is_reported(session_factory):
    session = session_factory(aiohttp.ClientConnectionError("reset"), method="post")

    result = await make_messenger(session).send_text("hello")

    assert not result.success
    assert result.error_code == "ClientConnectionError"


@pytest.mark.asyncio
async def test_console_messenger_prints_locally():
    buffer = io.StringIO()
    messenger = ConsoleMessenger(
        console=Console(file=buffer, no_color=True), rng=random.Random(0)
    )

    result = await messenger.send_text("[Q] Capital of France?")

    assert not result.success
    assert messenger.sent == ["[Q] Capital of France?"]
    assert "[Q] Capital of France?" in buffer.getvalue()


def test_factory_uses_console_in_dev(settings, session_factory):
    assert isinstance(create_messenger(settings, session_factory()), ConsoleMessenger)


def test_factory_uses_groupme_in_prod(settings, monkeypatch, session_factory):
    monkeypatch.setenv("ENVIRONMENT", "PROD")

    messenger = create_messenger(Settings(), session_factory())

    assert isinstance(messenger, GroupMeMessenger)
    assert messenger.bot_id == "test_bot"
    assert messenger.group_id == "test_group"
