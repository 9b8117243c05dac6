"""Notifier port: publishes committed domain events.

The dispatcher hands each event recorded on a unit of work to ``publish``
after that unit commits. A failing subscriber is the bus's problem: it is
logged there and never reaches the request that produced the event.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from conduit.domain.events.base_event import DomainEvent

type EventHandler = Callable[[DomainEvent], Awaitable[None]]


class EventBusProtocol(Protocol):
    """Publish/subscribe by exact event class."""

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Call ``handler`` for every published event of exactly ``event_type``."""
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Deliver ``event`` to its subscribers; subscriber errors never propagate."""
        ...
