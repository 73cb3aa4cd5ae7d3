"""msghub - an in-process event aggregator."""

from msghub.core.exceptions import (
    InvalidArgumentError,
    MessageHubError,
    NullArgumentError,
)
from msghub.domain.options import SubscriptionOptions
from msghub.domain.ports import MessageHubPort
from msghub.hub import MessageHub, get_hub

__version__ = "0.1.0"

__all__ = [
    "MessageHub",
    "MessageHubPort",
    "get_hub",
    "SubscriptionOptions",
    "MessageHubError",
    "NullArgumentError",
    "InvalidArgumentError",
]
