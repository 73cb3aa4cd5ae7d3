"""Per-subscription options."""

from __future__ import annotations

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SubscriptionOptions(BaseModel):
    """Validated options for a single subscription.

    ``throttle`` accepts a ``timedelta`` or a number of seconds and is the
    minimum duration between two deliveries to the subscription.  Zero
    disables throttling.
    """

    model_config = ConfigDict(frozen=True)

    throttle: timedelta = Field(default=timedelta(0))

    @field_validator("throttle")
    @classmethod
    def _non_negative(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("throttle must not be negative")
        return value

    @property
    def throttle_ns(self) -> int:
        """The throttle window in monotonic-clock nanoseconds."""
        return (
            self.throttle.days * 86_400_000_000_000
            + self.throttle.seconds * 1_000_000_000
            + self.throttle.microseconds * 1_000
        )
