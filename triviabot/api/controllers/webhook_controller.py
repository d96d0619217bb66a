"""
Webhook controller for inbound GroupMe messages.

Routes handle only HTTP concerns; this controller parses the callback,
recognizes the two trivia commands and drives the round. It never raises:
every failure is logged and the route still answers 200.
"""

import asyncio
from typing import Any

from pydantic import ValidationError

from triviabot.core.exceptions import (
    PersistenceWriteError,
    ProviderError,
    SourceExhausted,
    TriviaError,
)
from triviabot.core.logging.context import clear_request_context, set_request_context
from triviabot.core.logging.logger import get_logger
from triviabot.domain.models import InboundMessage
from triviabot.game.commands import Command, CommandType, parse_command
from triviabot.game.trivia_round import TriviaRound


class WebhookController:
    """
    Dispatches inbound chat messages to the trivia round.

    Handling is serialized with a lock so overlapping callbacks in one
    process cannot double-score or lose a round-state write.
    """

    def __init__(self, trivia_round: TriviaRound):
        self.trivia_round = trivia_round
        self.logger = get_logger(__name__)
        self._lock = asyncio.Lock()

    @staticmethod
    def parse_event(raw_event: Any) -> InboundMessage | None:
        """Validate a raw callback body; None if it is not a usable message."""
        if not isinstance(raw_event, dict):
            return None
        try:
            return InboundMessage.model_validate(raw_event)
        except ValidationError:
            return None

    async def handle(self, raw_event: Any) -> str:
        """
        Handle one inbound callback.

        Returns:
            Short description of what happened, for logging and tests
        """
        message = self.parse_event(raw_event)
        if message is None:
            self.logger.warning("Ignoring unparseable webhook payload")
            return "invalid"

        if message.is_from_bot:
            return "ignored"

        set_request_context(group_id=message.group_id, user_id=message.user_id)
        try:
            async with self._lock:
                return await self._dispatch(message)
        finally:
            clear_request_context()

    async def _dispatch(self, message: InboundMessage) -> str:
        command = parse_command(message.text)

        try:
            status = await self.trivia_round.check_and_expire()

            if not status.active:
                if command.type is CommandType.ASK:
                    await self.trivia_round.ask_question()
                    return "asked"
                self.logger.debug("No active question, nothing to do")
                return "noop"

            if command.type is CommandType.ANSWER:
                outcome = await self._submit(message, command)
                return outcome.value

            self.logger.debug("Question still active")
            return "noop"

        except (ProviderError, SourceExhausted) as e:
            self.logger.error(f"Could not ask a question: {e}")
            return "error"
        except PersistenceWriteError as e:
            self.logger.error(f"Command aborted, state not saved: {e}")
            return "error"
        except TriviaError as e:
            self.logger.error(f"Trivia error: {e}")
            return "error"

    async def _submit(self, message: InboundMessage, command: Command):
        username = message.name or message.user_id
        return await self.trivia_round.submit_answer(
            message.user_id, username, command.argument
        )
