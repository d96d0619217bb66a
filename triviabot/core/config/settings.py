"""
Settings for the triviabot webhook service.

Plain environment variables (a local ``.env`` is loaded first) for the GroupMe
bot credentials, the answer window, persistence and the question source.
"""

import os
import tomllib
from importlib import metadata
from pathlib import Path

from dotenv import load_dotenv

from triviabot.core.exceptions import ConfigurationMissing

load_dotenv(".env")

PACKAGE_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_QUESTIONS_FILE = PACKAGE_ROOT / "data" / "questions.json"
FALLBACK_VERSION = "0.1.0"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
ENVIRONMENTS = ("DEV", "PROD")


def _read_version() -> str:
    """Version from the checkout's pyproject.toml, else the installed metadata."""
    pyproject = PACKAGE_ROOT.parent / "pyproject.toml"
    if pyproject.is_file():
        try:
            with pyproject.open("rb") as f:
                version = tomllib.load(f).get("project", {}).get("version")
            if version:
                return version
        except (OSError, tomllib.TOMLDecodeError):
            pass

    try:
        return metadata.version("triviabot")
    except metadata.PackageNotFoundError:
        return FALLBACK_VERSION


def _choice(name: str, value: str, allowed: tuple[str, ...]) -> str:
    value = value.lower()
    if value not in allowed:
        raise ValueError(f"{name} must be one of {list(allowed)}, got {value!r}")
    return value


class Settings:
    """Environment-based configuration, read once per instance."""

    def __init__(self):
        self.version: str = _read_version()
        self.port: int = int(os.getenv("PORT", "8000"))
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_dir: str = os.getenv("LOG_DIR", "./logs")

        # DEV prints chat posts to the console, PROD posts them to GroupMe
        self.environment: str = os.getenv("ENVIRONMENT", "DEV")

        # GroupMe bot
        self.groupme_access_token: str | None = os.getenv("GROUPME_ACCESS_TOKEN")
        self.groupme_group_id: str | None = os.getenv("GROUPME_GROUP_ID")
        self.groupme_bot_id: str | None = os.getenv("GROUPME_BOT_ID")
        self.groupme_api_url: str = os.getenv(
            "GROUPME_API_URL", "https://api.groupme.com/v3"
        )

        # Round and persistence
        self.secs_to_answer: int = int(os.getenv("SECS_TO_ANSWER", "30"))
        self.data_dir: str = os.getenv("DATA_DIR", "./data")
        self.store_backend: str = os.getenv("STORE_BACKEND", "json")

        # Question source
        self.question_source: str = os.getenv("QUESTION_SOURCE", "corpus")
        self.questions_file: str = os.getenv(
            "QUESTIONS_FILE", str(DEFAULT_QUESTIONS_FILE)
        )
        self.corpus_exhaustion: str = os.getenv("CORPUS_EXHAUSTION", "reset")
        self.remote_question_url: str = os.getenv(
            "REMOTE_QUESTION_URL", "http://jservice.io/api/random"
        )
        self.remote_max_attempts: int = int(os.getenv("REMOTE_MAX_ATTEMPTS", "5"))
        self.remote_retry_delay: float = float(os.getenv("REMOTE_RETRY_DELAY", "0.5"))

        self._validate_settings()

    def _validate_settings(self):
        """Normalize case and reject values the service cannot run with."""
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {list(LOG_LEVELS)}")

        # Unknown environments run as DEV
        self.environment = self.environment.upper()
        if self.environment not in ENVIRONMENTS:
            self.environment = "DEV"

        if self.secs_to_answer <= 0:
            raise ValueError("SECS_TO_ANSWER must be a positive number of seconds")
        if self.remote_max_attempts < 1:
            raise ValueError("REMOTE_MAX_ATTEMPTS must be at least 1")
        if self.remote_retry_delay < 0:
            raise ValueError("REMOTE_RETRY_DELAY must not be negative")

        self.store_backend = _choice("STORE_BACKEND", self.store_backend, ("json", "memory"))
        self.question_source = _choice(
            "QUESTION_SOURCE", self.question_source, ("corpus", "remote")
        )
        self.corpus_exhaustion = _choice(
            "CORPUS_EXHAUSTION", self.corpus_exhaustion, ("reset", "fail")
        )

    def validate(self) -> None:
        """
        Check that every GroupMe credential is present.

        Called by the application factory before the server starts.

        Raises:
            ConfigurationMissing: Naming the first missing variable
        """
        required = {
            "GROUPME_ACCESS_TOKEN": self.groupme_access_token,
            "GROUPME_GROUP_ID": self.groupme_group_id,
            "GROUPME_BOT_ID": self.groupme_bot_id,
        }
        for name, value in required.items():
            if not value:
                raise ConfigurationMissing(f"{name} must be set")

    @property
    def is_development(self) -> bool:
        return self.environment == "DEV"

    @property
    def is_production(self) -> bool:
        return self.environment == "PROD"


settings = Settings()
