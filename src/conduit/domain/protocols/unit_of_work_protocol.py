"""Unit-of-work protocol as seen by handlers.

Handlers never begin, commit or roll back a unit; the dispatcher owns those
transitions. Handlers only reach repositories through the unit and record
domain events on it.
"""

from typing import Protocol

from conduit.domain.events.base_event import DomainEvent
from conduit.domain.protocols.order_repository import OrderRepository


class OrderUnitOfWork(Protocol):
    """Handler-facing view of an active unit of work."""

    @property
    def orders(self) -> OrderRepository:
        """Order repository bound to this unit's transaction."""
        ...

    def record_event(self, event: DomainEvent) -> None:
        """Stage a domain event, published only if the unit commits."""
        ...
