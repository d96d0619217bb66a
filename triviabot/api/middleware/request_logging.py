"""
Request and response logging middleware.

Logs method, path, status and timing. Message bodies are never logged.
"""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from triviabot.core.logging.logger import get_logger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each HTTP request with its processing time."""

    skip_paths = ("/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico")

    def __init__(self, app, add_timing_header: bool = False):
        super().__init__(app)
        self.add_timing_header = add_timing_header

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.time()
        logger = get_logger(__name__)

        skip = request.url.path.startswith(self.skip_paths)
        if not skip:
            client = request.client.host if request.client else "unknown"
            logger.debug(f"Incoming {request.method} {request.url.path} from {client}")

        response = await call_next(request)
        process_time_ms = round((time.time() - start_time) * 1000, 2)

        if self.add_timing_header:
            response.headers["X-Process-Time"] = str(process_time_ms)

        if not skip:
            status_code = response.status_code
            message = (
                f"Response {status_code} for {request.method} {request.url.path} "
                f"({process_time_ms}ms)"
            )
            if status_code >= 500:
                logger.error(message)
            elif status_code >= 400:
                logger.warning(message)
            else:
                logger.info(message)

        return response
