"""Domain types for msghub."""

from msghub.domain.options import SubscriptionOptions
from msghub.domain.ports import (
    GlobalErrorHandler,
    GlobalHandler,
    MessageHandler,
    MessageHubPort,
)

__all__ = [
    "SubscriptionOptions",
    "MessageHubPort",
    "MessageHandler",
    "GlobalHandler",
    "GlobalErrorHandler",
]
