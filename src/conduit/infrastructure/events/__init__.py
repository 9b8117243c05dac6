"""Event bus adapters and event handlers."""

from conduit.infrastructure.events.in_memory_event_bus import InMemoryEventBus

__all__ = ["InMemoryEventBus"]
