"""
Health check endpoint.
"""

import time
from typing import Any

from fastapi import APIRouter, Depends, Request

from triviabot.api.dependencies import get_settings
from triviabot.core.config.settings import Settings
from triviabot.core.logging.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    request: Request, settings: Settings = Depends(get_settings)
) -> dict[str, Any]:
    """Return service status plus the active game configuration."""
    start_time = time.time()
    source = getattr(request.app.state, "question_source", None)

    health_data = {
        "status": "healthy",
        "timestamp": time.time(),
        "environment": {
            "environment": settings.environment,
            "version": settings.version,
            "log_level": settings.log_level,
        },
        "game": {
            "question_source": source.mode if source else settings.question_source,
            "secs_to_answer": settings.secs_to_answer,
            "store_backend": settings.store_backend,
        },
    }
    health_data["response_time_ms"] = round((time.time() - start_time) * 1000, 2)

    logger.debug(f"Health check completed in {health_data['response_time_ms']}ms")
    return health_data
