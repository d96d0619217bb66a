"""
Rich console logging with chat context.

Every record logged through a ContextLogger is prefixed with the group and
sender of the GroupMe message being handled, e.g.::

    [controllers.webhook_controller] [G:1234][U:5678] Asked question: ...

The group and sender come from the request context (see context.py) at the
moment of the log call, so module-level loggers pick them up too.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from triviabot.core.config.settings import Settings, settings

from .context import get_current_group_context, get_current_user_context

PACKAGE_PREFIX = "triviabot."
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
CONSOLE_FORMAT = "[%(name)s] %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_console = Console(
    theme=Theme(
        {
            "info": "cyan",
            "warning": "yellow",
            "error": "bold red",
            "debug": "dim white",
        }
    )
)


class CompactFormatter(logging.Formatter):
    """Keeps only the last two parts of triviabot module names."""

    def format(self, record):
        if record.name.startswith(PACKAGE_PREFIX):
            parts = record.name.split(".")
            if len(parts) > 2:
                record.name = ".".join(parts[-2:])
        return super().format(record)


class ContextLogger:
    """
    Thin wrapper over a stdlib logger that prefixes the chat context.

    Values passed to the constructor (or bind) are fallbacks; the live
    request context wins when set.
    """

    def __init__(
        self,
        logger: logging.Logger,
        group_id: str | None = None,
        user_id: str | None = None,
    ):
        self.logger = logger
        self.group_id = group_id
        self.user_id = user_id

    def _prefix(self) -> str:
        group = get_current_group_context() or self.group_id
        user = get_current_user_context() or self.user_id
        prefix = ""
        if group:
            prefix += f"[G:{group}]"
        if user:
            prefix += f"[U:{user}]"
        return f"{prefix} " if prefix else ""

    def _log(self, level: int, message: str, *args, **kwargs) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, self._prefix() + message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs) -> None:
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self._log(logging.ERROR, message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs) -> None:
        self._log(logging.CRITICAL, message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs) -> None:
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, message, *args, **kwargs)

    def bind(self, **context) -> ContextLogger:
        """Return a copy with ``group_id`` and/or ``user_id`` replaced."""
        return ContextLogger(
            self.logger,
            group_id=context.get("group_id", self.group_id),
            user_id=context.get("user_id", self.user_id),
        )


def _file_handler(log_dir: str) -> logging.Handler:
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(
        directory / f"triviabot_{date.today():%Y%m%d}.log", encoding="utf-8"
    )
    handler.setFormatter(CompactFormatter(FILE_FORMAT))
    return handler


def setup_logging(
    *,
    level: str = "INFO",
    mode: str = "PROD",
    log_dir: str | None = None,
) -> None:
    """
    Configure the root logger.

    The console always gets a RichHandler. In DEV mode with a ``log_dir`` a
    daily file log is added next to it. Unknown levels fall back to INFO.
    """
    level = level.upper() if level.upper() in LEVELS else "INFO"

    console_handler = RichHandler(
        console=_console,
        rich_tracebacks=True,
        show_time=True,
        show_level=True,
        markup=False,
    )
    console_handler.setFormatter(CompactFormatter(CONSOLE_FORMAT))
    handlers: list[logging.Handler] = [console_handler]

    if mode.upper() == "DEV" and log_dir:
        handlers.append(_file_handler(log_dir))

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.getLogger(PACKAGE_PREFIX + "logging").info(
        f"Logging initialized ({level}, {mode.upper()}, "
        f"{'console + file' if len(handlers) > 1 else 'console only'})"
    )


def setup_app_logging(app_settings: Settings | None = None) -> None:
    """Configure logging from settings; the global settings when none are given."""
    app_settings = app_settings or settings
    setup_logging(
        level=app_settings.log_level,
        mode=app_settings.environment,
        log_dir=app_settings.log_dir if app_settings.is_development else None,
    )


def get_logger(name: str) -> ContextLogger:
    """Context-aware logger for ``name`` (usually ``__name__``)."""
    return ContextLogger(logging.getLogger(name))


def get_app_logger() -> ContextLogger:
    """Logger for application lifecycle events."""
    return get_logger(PACKAGE_PREFIX + "app")
