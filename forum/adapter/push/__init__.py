"""Realtime push channel adapters."""

from .memory import InMemoryPushChannel, InMemorySubscription

__all__ = ["InMemoryPushChannel", "InMemorySubscription"]
