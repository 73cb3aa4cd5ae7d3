"""Custom exceptions for msghub."""


class MessageHubError(Exception):
    """Base exception for all msghub errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NullArgumentError(MessageHubError, TypeError):
    """Raised when a handler or observer is ``None``."""

    pass


class InvalidArgumentError(MessageHubError, ValueError):
    """Raised when a subscription argument fails validation."""

    pass
