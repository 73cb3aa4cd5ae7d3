"""Core exceptions for msghub."""

from msghub.core.exceptions import (
    InvalidArgumentError,
    MessageHubError,
    NullArgumentError,
)

__all__ = [
    "MessageHubError",
    "NullArgumentError",
    "InvalidArgumentError",
]
