"""Order read models.

DTOs are frozen dataclasses built from domain entities; the inbound
gateway serializes them into the result envelope.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from conduit.domain.entities.order import Order
from conduit.domain.enums import OrderStatus


@dataclass(frozen=True, kw_only=True)
class OrderView:
    """Single order as returned to callers."""

    id: UUID
    customer_id: UUID
    sku: str
    quantity: int
    unit_price: Decimal
    total: Decimal
    status: OrderStatus
    client_reference: str | None
    cancellation_reason: str | None
    created_at: datetime
    cancelled_at: datetime | None

    @classmethod
    def from_entity(cls, order: Order) -> "OrderView":
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            sku=order.sku,
            quantity=order.quantity,
            unit_price=order.unit_price,
            total=order.total,
            status=order.status,
            client_reference=order.client_reference,
            cancellation_reason=order.cancellation_reason,
            created_at=order.created_at,
            cancelled_at=order.cancelled_at,
        )


@dataclass(frozen=True, kw_only=True)
class OrderPage:
    """One page of a customer's orders.

    Attributes:
        items: Orders on this page.
        total_count: Orders matching the filter across all pages.
        limit: Requested page size.
        offset: Requested offset.
    """

    items: tuple[OrderView, ...]
    total_count: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.items) < self.total_count
