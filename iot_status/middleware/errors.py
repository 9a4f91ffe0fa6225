"""Error handling middleware for consistent error responses."""

import logging
import traceback
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware that turns unhandled exceptions into a generic 500 response.

    Logs each failure and counts errors by exception type. The server keeps
    serving after an error.

    Example:
        >>> counts: dict[str, int] = {}
        >>> app.add_middleware(ErrorHandlingMiddleware, error_counts=counts)
    """

    def __init__(
        self,
        app: Any,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
        error_counts: dict[str, int] | None = None,
    ) -> None:
        """Initialize error handling middleware.

        Args:
            app: The ASGI application to wrap.
            logger: Optional custom logger.
            include_traceback: Log full tracebacks and return the exception
                message in the response.
            error_counts: Dict to count errors in, shared with whoever
                reports them. A private one is used when omitted.
        """
        super().__init__(app)
        self.logger = logger or logging.getLogger(__name__)
        self.include_traceback = include_traceback
        self._error_counts = error_counts if error_counts is not None else {}

    def get_error_stats(self) -> dict[str, int]:
        """Get error statistics by exception type."""
        return dict(self._error_counts)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Run the request, converting unhandled errors to JSON."""
        try:
            return await call_next(request)

        except Exception as e:
            error_type = type(e).__name__
            self._error_counts[error_type] = self._error_counts.get(error_type, 0) + 1

            if self.include_traceback:
                self.logger.error(
                    "Error in %s %s: %s: %s\n%s",
                    request.method,
                    request.url.path,
                    error_type,
                    str(e),
                    traceback.format_exc(),
                )
            else:
                self.logger.error(
                    "Error in %s %s: %s: %s",
                    request.method,
                    request.url.path,
                    error_type,
                    str(e),
                )

            content: dict[str, Any] = {"success": False, "error": "Internal server error"}
            if self.include_traceback:
                content["message"] = str(e)
            return JSONResponse(content, status_code=500)
