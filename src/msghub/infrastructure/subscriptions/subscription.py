"""A single handler registration on the hub."""

from __future__ import annotations

import inspect
import time
from typing import Any, Callable
from uuid import UUID

from msghub.domain.ports import MessageHandler

Clock = Callable[[], int]


class Subscription:
    """One handler bound to a message type, with an optional throttle.

    ``throttle_ns`` is the minimum number of monotonic nanoseconds between
    two deliveries; zero disables throttling.  The first delivery always
    passes and a delivery exactly ``throttle_ns`` after the previous one
    passes too.
    """

    __slots__ = (
        "_type",
        "_token",
        "_throttle_ns",
        "_handler",
        "_clock",
        "_last_timestamp",
        "_retired",
    )

    def __init__(
        self,
        message_type: type,
        token: UUID,
        throttle_ns: int,
        handler: MessageHandler,
        clock: Clock = time.monotonic_ns,
    ) -> None:
        self._type = message_type
        self._token = token
        self._throttle_ns = throttle_ns
        self._handler = handler
        self._clock = clock
        self._last_timestamp: int | None = None
        self._retired = False

    @property
    def type(self) -> type:
        return self._type

    @property
    def token(self) -> UUID:
        return self._token

    @property
    def throttle_ns(self) -> int:
        return self._throttle_ns

    @property
    def last_timestamp(self) -> int | None:
        return self._last_timestamp

    @property
    def retired(self) -> bool:
        """True once the subscription was removed from its registry."""
        return self._retired

    def retire(self) -> None:
        self._retired = True

    def matches(self, message_type: type) -> bool:
        return issubclass(message_type, self._type)

    def can_handle(self) -> bool:
        """Throttle gate; records the delivery time when it lets one through."""
        if self._throttle_ns == 0:
            return True

        if self._last_timestamp is None:
            self._last_timestamp = self._clock()
            return True

        now = self._clock()
        if now - self._last_timestamp >= self._throttle_ns:
            self._last_timestamp = now
            return True

        return False

    async def handle(self, message: Any) -> None:
        """Deliver *message* to the handler unless narrowed out or throttled."""
        if not isinstance(message, self._type):
            return
        if not self.can_handle():
            return

        result = self._handler(message)
        if inspect.isawaitable(result):
            await result

    def __repr__(self) -> str:
        return (
            f"Subscription(type={self._type.__name__}, token={self._token}, "
            f"throttle_ns={self._throttle_ns})"
        )
