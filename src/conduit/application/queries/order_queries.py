"""Order queries."""

from dataclasses import dataclass
from uuid import UUID

from conduit.application.requests import Query
from conduit.domain.enums import OrderStatus
from conduit.domain.types import PageLimit, PageOffset


@dataclass(frozen=True, kw_only=True)
class GetOrder(Query):
    """Fetch one order by ID.

    Returns (via handler):
        Success(OrderView) or Failure(NotFoundError).
    """

    order_id: UUID


@dataclass(frozen=True, kw_only=True)
class ListCustomerOrders(Query):
    """List a customer's orders, newest first.

    Attributes:
        customer_id: Customer whose orders to list.
        status: Optional status filter.
        limit: Page size.
        offset: Orders to skip.
    """

    customer_id: UUID
    status: OrderStatus | None = None
    limit: PageLimit = 50
    offset: PageOffset = 0
