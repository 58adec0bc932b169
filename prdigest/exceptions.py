"""prdigest exception classes."""


class PRDigestError(Exception):
    """Base exception for all prdigest errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(PRDigestError):
    """Raised when client configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class FormatError(PRDigestError):
    """Raised when a timestamp field is not a valid RFC 3339 date-time."""

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(
            "FORMAT_ERROR", f"{field} is not a valid date-time: {value!r}"
        )


class TransportError(PRDigestError):
    """Raised when a page, detail or files fetch fails."""

    def __init__(
        self,
        code: str,
        message: str,
        request_id: str | None = None,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.status_code = status_code
        self.url = url


class AuthenticationError(TransportError):
    """Raised when the token is missing or rejected (401)."""

    pass


class AuthorizationError(TransportError):
    """Raised when access is denied (403)."""

    pass


class NotFoundError(TransportError):
    """Raised when a repository or pull request is not found."""

    pass


class RateLimitedError(TransportError):
    """Raised when the API rate limit is exhausted."""

    def __init__(
        self,
        code: str,
        message: str,
        reset_at: int | None = None,
        request_id: str | None = None,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id, status_code, url)
        self.reset_at = reset_at


class ValidationError(TransportError):
    """Raised on other client errors (400, 422, ...)."""

    pass


class ServerError(TransportError):
    """Raised on server errors (5xx), connection failures and bad bodies."""

    pass
