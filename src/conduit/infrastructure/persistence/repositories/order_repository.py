"""SqlAlchemyOrderRepository - SQLAlchemy implementation of OrderRepository.

Adapter for hexagonal architecture. Maps between domain Order entities and
the OrderModel table. Works on the session owned by the active unit of
work: writes are flushed, never committed, here.

Every SQLAlchemyError is re-raised as PersistenceError so handlers can
turn storage failures into DependencyError without knowing SQLAlchemy.
"""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from conduit.core.errors import PersistenceError
from conduit.domain.entities.order import Order
from conduit.domain.enums import OrderStatus
from conduit.infrastructure.persistence.models.order import OrderModel


class SqlAlchemyOrderRepository:
    """SQLAlchemy implementation of OrderRepository protocol.

    This class does NOT inherit from the protocol (structural typing).

    Attributes:
        session: SQLAlchemy async session of the active unit of work.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, order_id: UUID) -> Order | None:
        """Find order by ID.

        Returns:
            Domain Order entity if found, None otherwise.

        Raises:
            PersistenceError: If the database query fails.
        """
        try:
            model = await self.session.get(OrderModel, order_id)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load order {order_id}") from e
        return self._to_domain(model) if model is not None else None

    async def find_by_client_reference(
        self, customer_id: UUID, client_reference: str
    ) -> Order | None:
        stmt = select(OrderModel).where(
            OrderModel.customer_id == customer_id,
            OrderModel.client_reference == client_reference,
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to look up order by client reference") from e
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def list_by_customer(
        self,
        customer_id: UUID,
        *,
        status: OrderStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Order]:
        """List a customer's orders, newest first.

        Raises:
            PersistenceError: If the database query fails.
        """
        stmt = select(OrderModel).where(OrderModel.customer_id == customer_id)
        if status is not None:
            stmt = stmt.where(OrderModel.status == status.value)
        stmt = (
            stmt.order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .limit(limit)
            .offset(offset)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to list orders") from e
        return [self._to_domain(model) for model in result.scalars().all()]

    async def count_by_customer(
        self, customer_id: UUID, *, status: OrderStatus | None = None
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(OrderModel)
            .where(OrderModel.customer_id == customer_id)
        )
        if status is not None:
            stmt = stmt.where(OrderModel.status == status.value)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to count orders") from e
        return int(result.scalar_one())

    async def add(self, order: Order) -> None:
        """Stage a new order (flushed, committed by the unit of work).

        Raises:
            PersistenceError: If the insert fails (including constraint
                violations).
        """
        self.session.add(self._to_model(order))
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to store order {order.id}") from e

    async def update(self, order: Order) -> None:
        """Stage changes to an existing order.

        Raises:
            PersistenceError: If the order row is missing or the update fails.
        """
        try:
            model = await self.session.get(OrderModel, order.id)
            if model is None:
                raise PersistenceError(f"Order {order.id} does not exist")
            model.status = order.status.value
            model.cancellation_reason = order.cancellation_reason
            model.cancelled_at = order.cancelled_at
            model.updated_at = order.updated_at
            await self.session.flush()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to update order {order.id}") from e

    def _to_domain(self, model: OrderModel) -> Order:
        """Convert database model to domain entity."""
        return Order(
            id=model.id,
            customer_id=model.customer_id,
            sku=model.sku,
            quantity=model.quantity,
            unit_price=model.unit_price,
            status=OrderStatus(model.status),
            client_reference=model.client_reference,
            cancellation_reason=model.cancellation_reason,
            cancelled_at=_as_utc(model.cancelled_at) if model.cancelled_at else None,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    def _to_model(self, entity: Order) -> OrderModel:
        """Convert domain entity to database model."""
        return OrderModel(
            id=entity.id,
            customer_id=entity.customer_id,
            sku=entity.sku,
            quantity=entity.quantity,
            unit_price=entity.unit_price,
            status=entity.status.value,
            client_reference=entity.client_reference,
            cancellation_reason=entity.cancellation_reason,
            cancelled_at=entity.cancelled_at,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


def _as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps (SQLite drops the offset)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
