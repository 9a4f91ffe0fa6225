"""Request-level errors reported to API callers."""


class InvalidRequestError(Exception):
    """Request rejected before any device was probed."""

    def __init__(self, message: str, status_code: int = 400):
        """Initialize request error.

        Args:
            message: Error text returned in the ``error`` field
            status_code: HTTP status for the response
        """
        self.message = message
        self.status_code = status_code
        super().__init__(message)
