"""Domain events (immutable facts about things that happened)."""

from conduit.domain.events.base_event import DomainEvent
from conduit.domain.events.order_events import OrderCancelled, OrderPlaced

__all__ = ["DomainEvent", "OrderCancelled", "OrderPlaced"]
