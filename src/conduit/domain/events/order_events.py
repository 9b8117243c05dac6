"""Order domain events."""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from conduit.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class OrderPlaced(DomainEvent):
    """A customer placed an order.

    Attributes:
        order_id: Placed order.
        customer_id: Customer who placed it.
        sku: Ordered SKU.
        quantity: Ordered units.
        total: Order total.
    """

    order_id: UUID
    customer_id: UUID
    sku: str
    quantity: int
    total: Decimal


@dataclass(frozen=True, kw_only=True, slots=True)
class OrderCancelled(DomainEvent):
    """An order was cancelled."""

    order_id: UUID
    customer_id: UUID
    reason: str
