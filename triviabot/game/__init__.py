"""
Trivia game core: answer normalization, question sources, points and the
round state machine.
"""

from .commands import Command, CommandType, parse_command
from .normalizer import answers_match, normalize
from .question_source import CorpusQuestionSource, RemoteQuestionSource, RetryPolicy
from .round_state import RoundStateRepository
from .score_store import ScoreStore
from .trivia_round import TriviaRound

__all__ = [
    "Command",
    "CommandType",
    "CorpusQuestionSource",
    "RemoteQuestionSource",
    "RetryPolicy",
    "RoundStateRepository",
    "ScoreStore",
    "TriviaRound",
    "answers_match",
    "normalize",
    "parse_command",
]
