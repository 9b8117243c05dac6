"""Order domain entity.

Pure business logic, no framework dependencies.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID

from uuid_extensions import uuid7

from conduit.domain.enums import OrderStatus


@dataclass
class Order:
    """Order placed by a customer for a quantity of one SKU.

    Business Rules:
        - Quantity and unit price are positive
        - Only PLACED orders can be cancelled
        - Cancellation records reason and timestamp

    Attributes:
        id: Unique order identifier (UUIDv7, time-ordered)
        customer_id: Customer who placed the order
        sku: Stock keeping unit (normalized upper case)
        quantity: Number of units
        unit_price: Price per unit
        status: Current lifecycle status
        client_reference: Optional client idempotency reference
        cancellation_reason: Reason given when cancelled
        cancelled_at: When the order was cancelled
        created_at: When the order was placed
        updated_at: When the order last changed
    """

    id: UUID
    customer_id: UUID
    sku: str
    quantity: int
    unit_price: Decimal
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
    client_reference: str | None = None
    cancellation_reason: str | None = None
    cancelled_at: datetime | None = None

    @classmethod
    def place(
        cls,
        *,
        customer_id: UUID,
        sku: str,
        quantity: int,
        unit_price: Decimal,
        client_reference: str | None = None,
    ) -> "Order":
        """Create a new PLACED order with a fresh identifier."""
        now = datetime.now(UTC)
        return cls(
            id=uuid7(),
            customer_id=customer_id,
            sku=sku,
            quantity=quantity,
            unit_price=unit_price,
            status=OrderStatus.PLACED,
            client_reference=client_reference,
            created_at=now,
            updated_at=now,
        )

    @property
    def total(self) -> Decimal:
        """Order total (quantity x unit price)."""
        return self.unit_price * self.quantity

    def can_cancel(self) -> bool:
        """Check whether the order may still be cancelled."""
        return self.status == OrderStatus.PLACED

    def cancel(self, reason: str) -> None:
        """Cancel the order.

        Args:
            reason: Why the order is cancelled.

        Raises:
            ValueError: If the order is not cancellable (callers check
                can_cancel() first and return a ConflictError).
        """
        if not self.can_cancel():
            raise ValueError(f"Order {self.id} is {self.status.value}")
        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED
        self.cancellation_reason = reason
        self.cancelled_at = now
        self.updated_at = now
