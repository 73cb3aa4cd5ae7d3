"""Tests for msghub.infrastructure.subscriptions.subscription."""

import asyncio
import time
import uuid

import pytest

from msghub.infrastructure.subscriptions.subscription import Subscription

from .messages import Command, FakeClock, MessageBase, Order

MS = 1_000_000


def _subscription(handler, message_type=str, throttle_ms=0, clock=None):
    return Subscription(
        message_type,
        uuid.uuid4(),
        throttle_ms * MS,
        handler,
        clock=clock or time.monotonic_ns,
    )


@pytest.mark.unit
class TestCanHandle:
    def test_unthrottled_always_passes(self, clock: FakeClock):
        sub = _subscription(lambda m: None, clock=clock)

        assert all(sub.can_handle() for _ in range(5))
        assert sub.last_timestamp is None

    def test_first_call_passes_and_records_timestamp(self, clock: FakeClock):
        sub = _subscription(lambda m: None, throttle_ms=100, clock=clock)

        assert sub.can_handle() is True
        assert sub.last_timestamp == clock.now

    def test_inside_window_is_dropped(self, clock: FakeClock):
        sub = _subscription(lambda m: None, throttle_ms=100, clock=clock)
        sub.can_handle()
        first = sub.last_timestamp

        clock.advance_ms(99)

        assert sub.can_handle() is False
        assert sub.last_timestamp == first

    def test_exact_window_passes(self, clock: FakeClock):
        sub = _subscription(lambda m: None, throttle_ms=100, clock=clock)
        sub.can_handle()

        clock.advance_ms(100)

        assert sub.can_handle() is True
        assert sub.last_timestamp == clock.now

    def test_window_restarts_from_last_delivery(self, clock: FakeClock):
        sub = _subscription(lambda m: None, throttle_ms=100, clock=clock)
        sub.can_handle()
        clock.advance_ms(150)
        assert sub.can_handle() is True

        clock.advance_ms(60)
        assert sub.can_handle() is False

        clock.advance_ms(40)
        assert sub.can_handle() is True

    def test_dropped_calls_do_not_extend_window(self, clock: FakeClock):
        sub = _subscription(lambda m: None, throttle_ms=100, clock=clock)
        sub.can_handle()
        for _ in range(9):
            clock.advance_ms(10)
            sub.can_handle()

        clock.advance_ms(10)

        assert sub.can_handle() is True


@pytest.mark.unit
class TestHandle:
    @pytest.mark.asyncio
    async def test_sync_handler_is_invoked(self):
        received = []
        sub = _subscription(received.append)

        await sub.handle("hello")

        assert received == ["hello"]

    @pytest.mark.asyncio
    async def test_async_handler_is_awaited(self):
        received = []

        async def handler(msg):
            await asyncio.sleep(0)
            received.append(msg)

        sub = _subscription(handler)
        await sub.handle("hello")

        assert received == ["hello"]

    @pytest.mark.asyncio
    async def test_mismatched_message_type_is_noop(self):
        received = []
        sub = _subscription(received.append, message_type=Command)

        await sub.handle(Order(name="order"))
        await sub.handle("not a message")

        assert received == []

    @pytest.mark.asyncio
    async def test_mismatched_message_does_not_consume_window(self, clock: FakeClock):
        received = []
        sub = _subscription(received.append, message_type=int, throttle_ms=100, clock=clock)

        await sub.handle("text")
        await sub.handle(1)

        assert received == [1]

    @pytest.mark.asyncio
    async def test_handler_failure_propagates(self):
        def handler(msg):
            raise RuntimeError(f"Ooops-{msg}")

        sub = _subscription(handler)

        with pytest.raises(RuntimeError, match="Ooops-A"):
            await sub.handle("A")

    @pytest.mark.asyncio
    async def test_throttled_with_real_clock(self):
        received = []
        sub = _subscription(received.append, throttle_ms=150)

        await sub.handle("Foo")
        await sub.handle("Bar")
        await asyncio.sleep(0.3)
        await sub.handle("Baz")

        assert received == ["Foo", "Baz"]

    def test_matches_base_types(self):
        sub = _subscription(lambda m: None, message_type=MessageBase)

        assert sub.matches(Command) is True
        assert sub.matches(MessageBase) is True
        assert sub.matches(str) is False
