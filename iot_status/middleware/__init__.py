"""iot_status HTTP middleware components."""

from iot_status.middleware.errors import ErrorHandlingMiddleware
from iot_status.middleware.logging import RequestLoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
]
