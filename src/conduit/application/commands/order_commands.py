"""Order commands.

Commands represent user intent to change order state. Field constraints
are declared with Annotated types and checked by the validation stage
before the handler runs; cross-field rules live in the CQRS registry.
"""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from conduit.application.requests import Command
from conduit.domain.types import (
    CancellationReason,
    ClientReference,
    Quantity,
    Sku,
    UnitPrice,
)


@dataclass(frozen=True, kw_only=True)
class CreateOrder(Command):
    """Place an order for a quantity of one SKU.

    Attributes:
        customer_id: Customer placing the order.
        sku: Stock keeping unit.
        quantity: Units to order (positive).
        unit_price: Price per unit (positive, 2 decimals).
        client_reference: Optional idempotency reference. A second order
            with the same reference for the same customer is a conflict.

    Returns (via handler):
        Success(UUID): The new order ID.
    """

    customer_id: UUID
    sku: Sku
    quantity: Quantity
    unit_price: UnitPrice
    client_reference: ClientReference | None = None

    @property
    def total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True, kw_only=True)
class CancelOrder(Command):
    """Cancel a placed order.

    Attributes:
        order_id: Order to cancel.
        reason: Why the order is cancelled.
    """

    order_id: UUID
    reason: CancellationReason
