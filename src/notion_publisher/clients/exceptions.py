"""Custom exceptions for the Notion API client."""


class ClientError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ConnectionError(ClientError):
    """Raised when a network connection fails."""

    pass


class APIError(ClientError):
    """Raised when the API returns a non-2xx response."""

    def __init__(
        self,
        message: str,
        status_code: int,
        code: str | None = None,
        *args,
        **kwargs,
    ):
        self.status_code = status_code
        self.code = code
        super().__init__(message, *args, **kwargs)


class UnauthorizedError(APIError):
    """Raised when the integration token is rejected (401)."""

    def __init__(self, message: str = "Unauthorized", code: str | None = None):
        super().__init__(message, status_code=401, code=code)


class RateLimitError(APIError):
    """Raised when the API returns a 429 rate limit response."""

    def __init__(self, message: str = "Rate limit exceeded"):
        super().__init__(message, status_code=429, code="rate_limited")


class NotFoundError(APIError):
    """Raised when the API returns a 404 not found response."""

    def __init__(self, message: str = "Resource not found", code: str | None = None):
        super().__init__(message, status_code=404, code=code)


class ValidationError(ClientError):
    """Raised when response data fails schema validation."""

    def __init__(self, message: str, errors: list | None = None, *args, **kwargs):
        self.errors = errors or []
        super().__init__(message, *args, **kwargs)
