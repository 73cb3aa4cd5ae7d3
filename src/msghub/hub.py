"""In-process event aggregator.

Publishers hand a message to the hub; every subscription whose declared
type is the message's runtime type or one of its base classes receives
it, serially and in registration order.  Subscriber failures are routed
to the global error handler and never reach the publisher.
"""

from __future__ import annotations

import inspect
import time
from functools import lru_cache
from typing import Any
from uuid import UUID

import structlog
from pydantic import ValidationError

from msghub.core.exceptions import InvalidArgumentError, NullArgumentError
from msghub.domain.options import SubscriptionOptions
from msghub.domain.ports import GlobalErrorHandler, GlobalHandler, MessageHandler
from msghub.infrastructure.subscriptions import SubscriptionRegistry
from msghub.infrastructure.subscriptions.subscription import Clock

logger = structlog.get_logger(__name__)


class MessageHub:
    """An implementation of the event aggregator pattern.

    Usage:
        hub = MessageHub()
        token = hub.subscribe(OrderPlaced, on_order_placed)
        await hub.publish(OrderPlaced(order_id="A-1"))
        hub.unsubscribe(token)

    Handlers may be plain callables or coroutine functions; awaitable
    results are awaited before the next subscriber runs.
    """

    def __init__(self, clock: Clock = time.monotonic_ns) -> None:
        self._registry = SubscriptionRegistry(clock=clock)
        self._global_handler: GlobalHandler | None = None
        self._global_error_handler: GlobalErrorHandler | None = None

    @property
    def registry(self) -> SubscriptionRegistry:
        return self._registry

    # ------------------------------------------------------------------ observers
    def register_global_handler(self, on_message: GlobalHandler) -> None:
        """Register the callback invoked with ``(type, message)`` on every publish.

        Replaces any previously registered global handler.
        """
        self._ensure_callable(on_message, "on_message")
        self._ensure_sync(on_message, "on_message")
        self._global_handler = on_message

    def register_global_error_handler(self, on_error: GlobalErrorHandler) -> None:
        """Register the callback invoked with ``(token, exc)`` when a subscriber fails.

        Replaces any previously registered global error handler.
        """
        self._ensure_callable(on_error, "on_error")
        self._ensure_sync(on_error, "on_error")
        self._global_error_handler = on_error

    # ------------------------------------------------------------------ publishing
    async def publish(self, message: Any) -> None:
        """Publish *message* to the global handler and every matching subscriber.

        Exceptions raised by the global handler propagate to the caller.
        """
        subscriptions = self._registry.snapshot()
        message_type = type(message)

        global_handler = self._global_handler
        if global_handler is not None:
            global_handler(message_type, message)

        for subscription in subscriptions:
            if subscription.retired:
                continue
            if not subscription.matches(message_type):
                continue

            try:
                await subscription.handle(message)
            except Exception as exc:
                self._on_handler_failure(subscription.token, message_type, exc)

    def _on_handler_failure(
        self, token: UUID, message_type: type, exc: Exception
    ) -> None:
        logger.warning(
            "hub.handler_failed",
            token=str(token),
            message_type=message_type.__name__,
            error=str(exc),
            exc_info=exc,
        )

        on_error = self._global_error_handler
        if on_error is None:
            return
        try:
            on_error(token, exc)
        except Exception:
            logger.exception("hub.error_handler_failed", token=str(token))

    # ------------------------------------------------------------------ subscription
    def subscribe(
        self,
        message_type: type,
        handler: MessageHandler,
        throttle: Any = 0,
    ) -> UUID:
        """Subscribe *handler* to messages of *message_type* and its subclasses.

        Args:
            message_type: Class the subscription matches polymorphically.
            handler: Callable taking the message; may return an awaitable.
            throttle: Minimum time between two deliveries, as a ``timedelta``
                or seconds.  Zero disables throttling.

        Returns:
            The token identifying the subscription.
        """
        self._ensure_callable(handler, "handler")
        if not isinstance(message_type, type):
            raise InvalidArgumentError(
                "message_type must be a class",
                details={"message_type": repr(message_type)},
            )
        try:
            issubclass(object, message_type)
        except TypeError as exc:
            raise InvalidArgumentError(
                "message_type does not support subclass checks",
                details={"message_type": repr(message_type)},
            ) from exc

        try:
            options = SubscriptionOptions(throttle=throttle)
        except ValidationError as exc:
            raise InvalidArgumentError(
                "invalid subscription options",
                details={"throttle": repr(throttle), "errors": exc.errors()},
            ) from exc

        token = self._registry.register(message_type, options.throttle_ns, handler)
        logger.debug(
            "hub.subscribed",
            token=str(token),
            message_type=message_type.__name__,
            throttle_ms=options.throttle.total_seconds() * 1000,
        )
        return token

    def unsubscribe(self, token: UUID) -> None:
        """Remove a subscription; unknown tokens are ignored."""
        if self._registry.unregister(token):
            logger.debug("hub.unsubscribed", token=str(token))

    def is_subscribed(self, token: UUID) -> bool:
        return self._registry.is_registered(token)

    def clear_subscriptions(self) -> None:
        """Remove every subscription; global handlers are not affected."""
        removed = self._registry.clear()
        logger.debug("hub.cleared", removed=removed)

    # ------------------------------------------------------------------ lifecycle
    def dispose(self) -> None:
        """Drop the global handler and all subscriptions.

        The global error handler is kept and the hub remains usable.
        """
        self._global_handler = None
        self.clear_subscriptions()
        logger.debug("hub.disposed")

    def __enter__(self) -> MessageHub:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()

    @staticmethod
    def _ensure_callable(obj: Any, name: str) -> None:
        if obj is None:
            raise NullArgumentError(f"{name} must not be None", details={"argument": name})
        if not callable(obj):
            raise InvalidArgumentError(
                f"{name} must be callable", details={"argument": name}
            )

    @staticmethod
    def _ensure_sync(obj: Any, name: str) -> None:
        if inspect.iscoroutinefunction(obj):
            raise InvalidArgumentError(
                f"{name} must not be a coroutine function",
                details={"argument": name},
            )


@lru_cache
def get_hub() -> MessageHub:
    """Get the process-wide default hub, created on first use."""
    return MessageHub()


__all__ = ["MessageHub", "get_hub"]
