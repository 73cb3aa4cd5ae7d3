"""Shared fixtures for msghub unit tests."""

from __future__ import annotations

import pytest

from msghub.hub import MessageHub

from .messages import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def hub() -> MessageHub:
    hub = MessageHub()
    yield hub
    hub.dispose()


@pytest.fixture
def errors(hub: MessageHub) -> list:
    """Records ``(token, exc)`` pairs routed to the hub's error handler."""
    recorded: list = []
    hub.register_global_error_handler(lambda token, exc: recorded.append((token, exc)))
    return recorded


@pytest.fixture
def audit(hub: MessageHub) -> list:
    """Records ``(type, message)`` pairs seen by the hub's global handler."""
    recorded: list = []
    hub.register_global_handler(lambda msg_type, msg: recorded.append((msg_type, msg)))
    return recorded
