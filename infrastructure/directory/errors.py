"""Errors raised by user directory clients."""


class DirectoryApiError(RuntimeError):
    """A request to the user directory failed."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnauthorizedError(DirectoryApiError):
    """The backend rejected the caller's credentials (HTTP 401)."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=401)


class TransportError(DirectoryApiError):
    """The request never produced a response (connection refused, timeout, ...)."""


class MalformedResponseError(DirectoryApiError):
    """The response body is missing expected fields or is not JSON."""
