"""OrderRepository protocol for order persistence.

Port (interface) for hexagonal architecture. Repositories participate in
the active unit of work: writes are staged in the unit's transaction and
become durable only when the unit commits.

Implementations raise PersistenceError when the storage backend fails.
"""

from typing import Protocol
from uuid import UUID

from conduit.domain.entities.order import Order
from conduit.domain.enums import OrderStatus


class OrderRepository(Protocol):
    """Order repository protocol (port).

    Methods:
        find_by_id: Retrieve order by ID
        find_by_client_reference: Retrieve a customer's order by idempotency reference
        list_by_customer: Page through a customer's orders
        count_by_customer: Count a customer's orders
        add: Stage a new order
        update: Stage changes to an existing order
    """

    async def find_by_id(self, order_id: UUID) -> Order | None:
        """Find order by ID.

        Returns:
            Order if found, None otherwise.
        """
        ...

    async def find_by_client_reference(
        self, customer_id: UUID, client_reference: str
    ) -> Order | None:
        """Find a customer's order by its client reference."""
        ...

    async def list_by_customer(
        self,
        customer_id: UUID,
        *,
        status: OrderStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Order]:
        """List a customer's orders, newest first.

        Args:
            customer_id: Customer whose orders to list.
            status: Optional status filter.
            limit: Maximum number of orders.
            offset: Number of orders to skip.

        Returns:
            List of orders (empty if none found).
        """
        ...

    async def count_by_customer(
        self, customer_id: UUID, *, status: OrderStatus | None = None
    ) -> int:
        """Count a customer's orders (same filter as list_by_customer)."""
        ...

    async def add(self, order: Order) -> None:
        """Stage a new order in the active unit of work."""
        ...

    async def update(self, order: Order) -> None:
        """Stage changes to an existing order in the active unit of work."""
        ...
