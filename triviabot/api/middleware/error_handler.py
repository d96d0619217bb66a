"""
Global error handling middleware.

The webhook must always answer 200, so an unexpected exception on the
webhook path still produces a 200 body; other paths get a 500.
"""

import time
import traceback
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from triviabot.core.logging.logger import get_logger

WEBHOOK_PATHS = ("/submit_message",)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Catches unhandled exceptions and turns them into structured responses."""

    def __init__(self, app, is_development: bool = False):
        super().__init__(app)
        self.is_development = is_development

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)

        except HTTPException as http_exc:
            logger = get_logger(__name__)
            logger.warning(
                f"HTTP {http_exc.status_code} - {request.method} {request.url.path} - "
                f"Detail: {http_exc.detail}"
            )
            raise

        except Exception as exc:
            return self._handle_unexpected_exception(request, exc)

    def _handle_unexpected_exception(self, request: Request, exc: Exception) -> JSONResponse:
        logger = get_logger(__name__)
        logger.error(
            f"Unhandled exception in {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )

        if request.url.path in WEBHOOK_PATHS:
            content: dict[str, Any] = {"status": "error"}
            status_code = 200
        else:
            content = {
                "detail": "Internal server error",
                "type": "internal_error",
                "timestamp": time.time(),
            }
            status_code = 500

        if self.is_development:
            content["debug"] = {
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
                "traceback": traceback.format_exc().split("\n"),
            }

        return JSONResponse(status_code=status_code, content=content)
