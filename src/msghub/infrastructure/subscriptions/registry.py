"""Subscription registry with per-thread snapshot caching.

Mutations (register, unregister, clear) take a single lock and bump a
change counter.  Publishers read a per-thread cached tuple of
subscriptions and only take the lock to rebuild it when the counter has
moved since the tuple was taken.
"""

from __future__ import annotations

import threading
import time
import uuid
from uuid import UUID

import structlog

from msghub.domain.ports import MessageHandler
from msghub.infrastructure.subscriptions.subscription import Clock, Subscription

logger = structlog.get_logger(__name__)


class _WorkerCache(threading.local):
    """Snapshot state private to the current thread."""

    def __init__(self) -> None:
        self.revision = 0
        self.subscriptions: tuple[Subscription, ...] = ()


class SubscriptionRegistry:
    """Ordered, lock-protected list of live subscriptions."""

    def __init__(self, clock: Clock = time.monotonic_ns) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._all: list[Subscription] = []
        self._change_counter = 0
        self._local = _WorkerCache()

    @property
    def change_counter(self) -> int:
        return self._change_counter

    def __len__(self) -> int:
        with self._lock:
            return len(self._all)

    def register(
        self,
        message_type: type,
        throttle_ns: int,
        handler: MessageHandler,
    ) -> UUID:
        """Append a new subscription and return its token."""
        token = uuid.uuid4()
        subscription = Subscription(
            message_type, token, throttle_ns, handler, clock=self._clock
        )

        with self._lock:
            self._all.append(subscription)
            self._change_counter += 1

        return token

    def unregister(self, token: UUID) -> bool:
        """Remove the subscription for *token*.

        Returns False for an unknown token, in which case nothing changes
        and the counter is left alone.
        """
        with self._lock:
            for idx, subscription in enumerate(self._all):
                if subscription.token == token:
                    break
            else:
                return False

            del self._all[idx]
            subscription.retire()
            self._change_counter += 1

        return True

    def clear(self) -> int:
        """Remove every subscription and return how many were removed."""
        with self._lock:
            removed = len(self._all)
            for subscription in self._all:
                subscription.retire()
            self._all.clear()
            self._change_counter += 1

        return removed

    def is_registered(self, token: UUID) -> bool:
        with self._lock:
            return any(s.token == token for s in self._all)

    def snapshot(self) -> tuple[Subscription, ...]:
        """Return this thread's view of the subscriptions.

        The cached tuple is returned as-is while the change counter still
        equals the revision it was taken at.
        """
        cache = self._local
        latest = self._change_counter
        if cache.revision == latest:
            return cache.subscriptions

        with self._lock:
            subscriptions = tuple(self._all)

        cache.revision = latest
        cache.subscriptions = subscriptions
        logger.debug(
            "registry.snapshot_rebuilt",
            revision=latest,
            count=len(subscriptions),
        )
        return subscriptions
