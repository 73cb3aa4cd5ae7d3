"""Port definitions.

The ``MessageHub`` Protocol describes the surface applications program
against; ``msghub.hub.MessageHub`` is the in-process implementation.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol, Union, runtime_checkable
from uuid import UUID

# ---------------------------------------------------------------------------
# Callable shapes
# ---------------------------------------------------------------------------

MessageHandler = Callable[[Any], Union[Awaitable[None], None]]
GlobalHandler = Callable[[type, Any], None]
GlobalErrorHandler = Callable[[UUID, Exception], None]


# ---------------------------------------------------------------------------
# Hub port
# ---------------------------------------------------------------------------


@runtime_checkable
class MessageHubPort(Protocol):
    """Publish/subscribe in-process event aggregator."""

    def register_global_handler(self, on_message: GlobalHandler) -> None: ...
    def register_global_error_handler(self, on_error: GlobalErrorHandler) -> None: ...
    async def publish(self, message: Any) -> None: ...
    def subscribe(
        self,
        message_type: type,
        handler: MessageHandler,
        throttle: Any = 0,
    ) -> UUID: ...
    def unsubscribe(self, token: UUID) -> None: ...
    def is_subscribed(self, token: UUID) -> bool: ...
    def clear_subscriptions(self) -> None: ...
    def dispose(self) -> None: ...
