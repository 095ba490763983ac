"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Every failure the CLI reports to the user is one of these; the entry point
prints the message and exits non-zero.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class UsageError(ApplicationError):
    """Raised when command-line arguments cannot be resolved."""

    def __init__(self, message: str = "Invalid usage") -> None:
        super().__init__(message, code="CLI_USAGE_ERROR")


class ConfigurationError(ApplicationError):
    """Raised when a settings file is missing or malformed."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="SYS_CONFIG_ERROR")


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class UserNotFoundError(NotFoundError):
    """Raised when the activity endpoint answers 404 for a username."""

    def __init__(self, username: str, message: str = "User not found.") -> None:
        self.username = username
        super().__init__(message)


class ExternalServiceError(ApplicationError):
    """Raised when an external service call fails."""

    def __init__(self, message: str = "External service error") -> None:
        super().__init__(message, code="SYS_EXTERNAL_SERVICE_ERROR")


class UpstreamStatusError(ExternalServiceError):
    """Raised when the activity endpoint answers with an unexpected status."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Failed to fetch activity. Status: {status_code}")


class TransportError(ExternalServiceError):
    """Raised when the request never produced a response (DNS, connect, timeout)."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Request error: {reason}")


class ResponseParseError(ApplicationError):
    """Raised when the response body is not a JSON array of events."""

    def __init__(self, message: str = "Error parsing response JSON.") -> None:
        super().__init__(message, code="SYS_PARSE_ERROR")
