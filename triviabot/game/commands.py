"""
Chat command recognition.

Two commands exist: ``/trivia`` asks a question and ``/a <answer>`` (or
``/answer <answer>``) submits one. Backslash works in place of the slash,
matching is case-insensitive and surrounding whitespace is ignored.
"""

import re
from dataclasses import dataclass
from enum import Enum

TRIVIA_PATTERN = re.compile(r"^\s*[\\/]trivia\s*$", re.IGNORECASE)
ANSWER_PATTERN = re.compile(r"^\s*[\\/](?:a|answer)\s+(\S.*?)\s*$", re.IGNORECASE | re.DOTALL)


class CommandType(Enum):
    ASK = "ask"
    ANSWER = "answer"
    NONE = "none"


@dataclass(frozen=True)
class Command:
    type: CommandType
    argument: str = ""


def parse_command(text: str | None) -> Command:
    """Classify a chat message."""
    if not text:
        return Command(CommandType.NONE)

    if TRIVIA_PATTERN.match(text):
        return Command(CommandType.ASK)

    match = ANSWER_PATTERN.match(text)
    if match:
        return Command(CommandType.ANSWER, match.group(1))

    return Command(CommandType.NONE)
