"""Request logging middleware with integrated timing."""

import logging
import time
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Paths polled by monitors; logging them is noise
QUIET_PATHS = frozenset({"/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with method, path, status and duration.

    Requests slower than ``slow_threshold_ms`` are logged at WARNING, which
    usually means a batch hit probe timeouts.
    """

    def __init__(
        self,
        app: Any,
        logger: logging.Logger | None = None,
        slow_threshold_ms: float = 5000.0,
    ) -> None:
        """Initialize logging middleware.

        Args:
            app: The ASGI application to wrap.
            logger: Optional custom logger.
            slow_threshold_ms: Threshold in ms for slow request warnings.
        """
        super().__init__(app)
        self.logger = logger or logging.getLogger(__name__)
        self.slow_threshold_ms = slow_threshold_ms

    def _format_duration(self, duration_ms: float) -> str:
        """Format duration with slow indicator if needed."""
        if duration_ms >= self.slow_threshold_ms:
            return f"{duration_ms:.1f}ms SLOW!"
        return f"{duration_ms:.1f}ms"

    def _client(self, request: Request) -> str:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
        if request.client:
            return request.client.host
        return "unknown"

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log the request before and after handling it."""
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start = time.perf_counter()
        self.logger.info(
            ">>> %s %s from %s",
            request.method,
            request.url.path,
            self._client(request),
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            self.logger.error(
                "<<< %s %s failed: %s [%s]",
                request.method,
                request.url.path,
                type(e).__name__,
                self._format_duration(duration_ms),
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        log_level = logging.WARNING if duration_ms >= self.slow_threshold_ms else logging.INFO
        self.logger.log(
            log_level,
            "<<< %s %s -> %d [%s]",
            request.method,
            request.url.path,
            response.status_code,
            self._format_duration(duration_ms),
        )
        return response
