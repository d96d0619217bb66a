"""
Exception hierarchy for triviabot.

Every failure the game can hit derives from TriviaError so the webhook
controller can log it and still answer the chat platform with 200.
"""


class TriviaError(Exception):
    """Base class for all triviabot errors."""


class ConfigurationMissing(TriviaError):
    """A required credential, id or data file is absent. Fatal at startup."""


class ProviderError(TriviaError):
    """The question source is unreachable or returned unusable data."""


class SourceExhausted(TriviaError):
    """The question corpus has no questions left."""


class PersistenceReadError(TriviaError):
    """A persisted document could not be read or decoded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read {path}: {reason}")


class PersistenceWriteError(TriviaError):
    """A persisted document could not be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write {path}: {reason}")
