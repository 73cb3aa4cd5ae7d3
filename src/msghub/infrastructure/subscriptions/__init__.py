"""Subscription storage and snapshotting."""

from msghub.infrastructure.subscriptions.registry import SubscriptionRegistry
from msghub.infrastructure.subscriptions.subscription import Subscription

__all__ = ["Subscription", "SubscriptionRegistry"]
