"""
Application factory for the triviabot webhook service.

Wires settings, logging, the HTTP session, the document store, the question
source and the messenger into a FastAPI app. Long-lived collaborators live on
app.state for the duration of the lifespan.
"""

from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import datetime

import aiohttp
from fastapi import FastAPI

from triviabot.api.controllers.webhook_controller import WebhookController
from triviabot.api.middleware.error_handler import ErrorHandlerMiddleware
from triviabot.api.middleware.request_logging import RequestLoggingMiddleware
from triviabot.api.routes.health import router as health_router
from triviabot.api.routes.webhooks import router as webhook_router
from triviabot.core.config.settings import Settings
from triviabot.core.logging.logger import get_app_logger, setup_app_logging
from triviabot.domain.interfaces.document_store import IDocumentStore
from triviabot.domain.interfaces.messaging_interface import IMessenger
from triviabot.domain.interfaces.question_source import IQuestionSource
from triviabot.domain.models import utc_now
from triviabot.game.question_source import (
    CorpusQuestionSource,
    RemoteQuestionSource,
    RetryPolicy,
)
from triviabot.game.round_state import RoundStateRepository
from triviabot.game.score_store import ScoreStore
from triviabot.game.trivia_round import TriviaRound
from triviabot.messaging.factory import create_messenger
from triviabot.persistence.store_factory import create_document_store


def create_http_session() -> aiohttp.ClientSession:
    """Persistent HTTP session shared by the messenger and the remote source."""
    connector = aiohttp.TCPConnector(
        limit=20,
        keepalive_timeout=30,
        enable_cleanup_closed=True,
    )
    return aiohttp.ClientSession(
        connector=connector, timeout=aiohttp.ClientTimeout(total=30)
    )


def build_question_source(
    settings: Settings, session: aiohttp.ClientSession | None = None
) -> IQuestionSource:
    """
    Build the configured question source.

    Raises:
        ConfigurationMissing: Corpus file unusable
        ValueError: Remote mode requested without an HTTP session
    """
    if settings.question_source == "remote":
        if session is None:
            raise ValueError("Remote question source needs an HTTP session")
        return RemoteQuestionSource(
            session,
            settings.remote_question_url,
            RetryPolicy(
                max_attempts=settings.remote_max_attempts,
                delay_seconds=settings.remote_retry_delay,
            ),
        )

    return CorpusQuestionSource.from_file(
        settings.questions_file, on_exhausted=settings.corpus_exhaustion
    )


def create_app(
    settings: Settings | None = None,
    *,
    messenger: IMessenger | None = None,
    question_source: IQuestionSource | None = None,
    store: IDocumentStore | None = None,
    clock: Callable[[], datetime] = utc_now,
    configure_logging: bool = True,
) -> FastAPI:
    """
    Create the FastAPI application.

    Collaborators can be injected (tests do); anything left out is built from
    settings. Credentials and the corpus are checked here, before the server
    accepts traffic.

    Raises:
        ConfigurationMissing: A GroupMe credential or the corpus file is missing
    """
    settings = settings or Settings()
    settings.validate()

    # Corpus mode is loaded up front so a bad file fails startup
    if question_source is None and settings.question_source == "corpus":
        question_source = build_question_source(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if configure_logging:
            setup_app_logging(settings)
        logger = get_app_logger()
        logger.info(f"🚀 Starting triviabot v{settings.version}")
        logger.info(f"📊 Environment: {settings.environment}")

        session = create_http_session()
        app.state.http_session = session

        try:
            source = question_source or build_question_source(settings, session)
            document_store = store or create_document_store(
                settings.store_backend, settings.data_dir
            )
            notifier = messenger or create_messenger(settings, session)

            trivia_round = TriviaRound(
                question_source=source,
                scores=ScoreStore(document_store),
                state=RoundStateRepository(document_store),
                messenger=notifier,
                secs_to_answer=settings.secs_to_answer,
                clock=clock,
            )

            app.state.question_source = source
            app.state.document_store = document_store
            app.state.messenger = notifier
            app.state.trivia_round = trivia_round
            app.state.webhook_controller = WebhookController(trivia_round)

            logger.info(
                f"🎲 Question source: {source.mode}, messenger: {notifier.name}, "
                f"answer window: {settings.secs_to_answer}s"
            )
            logger.info(f"📍 Webhook URL: http://localhost:{settings.port}/submit_message")

            yield
        finally:
            await session.close()
            logger.info("🛑 triviabot shut down, HTTP session closed")

    app = FastAPI(
        title="triviabot",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url=None,
    )
    app.state.settings = settings

    # Added last runs outermost
    app.add_middleware(
        RequestLoggingMiddleware, add_timing_header=settings.is_development
    )
    app.add_middleware(ErrorHandlerMiddleware, is_development=settings.is_development)

    app.include_router(health_router)
    app.include_router(webhook_router)

    return app
