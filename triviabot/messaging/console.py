"""
Console messenger for development.

In DEV mode nothing is posted to GroupMe; each message is printed to the
terminal in a random color instead.
"""

import random

from rich.console import Console

from triviabot.domain.interfaces.messaging_interface import IMessenger
from triviabot.domain.models import MessageResult

ANSI_COLORS = ["red", "yellow", "green", "cyan", "magenta", "blue"]


class ConsoleMessenger(IMessenger):
    """Prints chat messages locally. Reports success=False since nothing was posted."""

    def __init__(self, console: Console | None = None, rng: random.Random | None = None):
        self.console = console or Console()
        self._rng = rng or random.Random()
        self.sent: list[str] = []

    @property
    def name(self) -> str:
        return "console"

    async def send_text(self, text: str) -> MessageResult:
        self.sent.append(text)
        color = self._rng.choice(ANSI_COLORS)
        self.console.print(text, style=color, markup=False, highlight=False)
        return MessageResult(success=False, error="development mode: not posted")
