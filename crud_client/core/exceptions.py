"""
Custom Exceptions.

Typed failures raised by the record client. Callers branch on the class
(or on `retryable`) instead of inspecting raw HTTP responses.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    retryable: bool = False

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when configuration is missing or invalid."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="SYS_CONFIGURATION_ERROR")


class NetworkError(ApplicationError):
    """Raised when the remote API cannot be reached (connect, read, timeout)."""

    retryable = True

    def __init__(self, message: str = "Network error") -> None:
        super().__init__(message, code="NET_TRANSPORT_ERROR")


class HTTPStatusError(ApplicationError):
    """Base for failures reported by the remote API with a status code."""

    def __init__(self, message: str, code: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message, code=code)


class ServerError(HTTPStatusError):
    """Raised on 5xx responses and any other unexpected non-2xx status."""

    def __init__(self, message: str = "Remote server error", status_code: int | None = None) -> None:
        super().__init__(message, code="SYS_REMOTE_SERVER_ERROR", status_code=status_code)

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return self.status_code is None or self.status_code >= 500


class ConflictError(HTTPStatusError):
    """Raised when the record already exists or its version is stale."""

    def __init__(self, message: str = "Resource conflict", status_code: int | None = 409) -> None:
        super().__init__(message, code="RES_CONFLICT", status_code=status_code)


class NotFoundError(HTTPStatusError):
    """Raised when a record cannot be found."""

    def __init__(self, message: str = "Resource not found", status_code: int | None = 404) -> None:
        super().__init__(message, code="RES_NOT_FOUND", status_code=status_code)
