"""
triviabot - chat-triggered trivia for GroupMe

A FastAPI webhook that asks a trivia question on ``/trivia``, scores
``/a <answer>`` submissions within a fixed answer window and keeps the round
and the points table in durable JSON documents between requests.
"""

from .core.config.settings import settings

__version__ = settings.version

__all__ = ["__version__"]
