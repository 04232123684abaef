"""Request logging middleware."""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from shortlink.common.logging_config import get_logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with its status and duration.

    Redirects also log their target, which is the resolved original URL for
    short-link hits. Storage outages surface as 503 and are logged as warnings.
    """

    def __init__(self, app, logger: logging.Logger = None):
        super().__init__(app)
        self.logger = logger or get_logger("shortlink.web")

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        self.logger.debug(f"Request: {request.method} {request.url.path} from {client_ip}")

        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception(f"Unhandled error: {request.method} {request.url.path}")
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        summary = (
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - Duration: {duration_ms:.2f}ms"
        )

        # Short-link hit
        location = response.headers.get("location")
        if location and 300 <= response.status_code < 400:
            summary += f" -> {location}"

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        self.logger.log(level, f"Response: {summary}")

        return response
