"""Custom exceptions for chapter archive transfers."""


class ClientError(Exception):
    """Base exception for all transfer errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ConnectionError(ClientError):
    """Raised when the connection fails or drops mid-transfer."""

    pass


class CancelledError(ClientError):
    """Raised when a transfer is stopped by its cancel event."""

    pass


class APIError(ClientError):
    """Raised when the download endpoint answers with a non-2xx status.

    Attributes:
        status_code: HTTP status of the response
    """

    def __init__(self, message: str, status_code: int, *args, **kwargs):
        self.status_code = status_code
        super().__init__(message, *args, **kwargs)


class NotFoundError(APIError):
    """Raised when the requested chapter archive does not exist (404)."""

    def __init__(self, message: str = "Chapter archive not found"):
        super().__init__(message, status_code=404)
