"""CreateOrder command handler.

Flow:
1. Field constraints and the order-total rule already passed (validation stage)
2. Reject a duplicate client reference for the customer
3. Check stock with the inventory service (resilience-wrapped)
4. Create Order entity and stage it in the unit of work
5. Record OrderPlaced (published after commit)
6. Return Success(order_id)

On failure:
- Return Failure(error); the dispatcher rolls the unit of work back

Architecture:
- Application layer ONLY imports from domain and core
- Repositories are reached through the unit of work, services are injected
"""

from typing import TYPE_CHECKING
from uuid import UUID

from conduit.application.commands.order_commands import CreateOrder
from conduit.application.errors import storage_unavailable
from conduit.core.enums import ErrorCode
from conduit.core.errors import ConflictError, DependencyError, PersistenceError
from conduit.core.result import Failure, Result, Success
from conduit.domain.entities.order import Order
from conduit.domain.events import OrderPlaced
from conduit.domain.protocols import (
    InventoryGatewayProtocol,
    LoggerProtocol,
    OrderUnitOfWork,
)

if TYPE_CHECKING:
    from conduit.application.pipeline.context import CorrelationContext


class CreateOrderHandler:
    """Handler for CreateOrder command."""

    def __init__(
        self,
        inventory: InventoryGatewayProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            inventory: Inventory service client (retry/circuit breaker applied).
            logger: Structured logger.
        """
        self._inventory = inventory
        self._logger = logger

    async def handle(
        self,
        cmd: CreateOrder,
        context: "CorrelationContext",
        uow: OrderUnitOfWork,
    ) -> Result[UUID, ConflictError | DependencyError]:
        """Place the order.

        Args:
            cmd: CreateOrder command (validated).
            context: Correlation context of the request.
            uow: Active unit of work.

        Returns:
            Success(UUID): New order ID.
            Failure(ConflictError): Duplicate reference or insufficient stock.
            Failure(DependencyError): Inventory or persistence failure.
        """
        try:
            if cmd.client_reference is not None:
                existing = await uow.orders.find_by_client_reference(
                    cmd.customer_id, cmd.client_reference
                )
                if existing is not None:
                    return Failure(
                        error=ConflictError(
                            code=ErrorCode.ORDER_ALREADY_EXISTS,
                            message="An order with this client reference already exists",
                            resource_type="Order",
                            conflicting_field="client_reference",
                            details={"order_id": str(existing.id)},
                        )
                    )
        except PersistenceError as e:
            return Failure(
                error=storage_unavailable(e, logger=self._logger, context=context)
            )

        stock_result = await self._inventory.check_availability(cmd.sku, cmd.quantity)
        match stock_result:
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=stock) if not stock.covers(cmd.quantity):
                return Failure(
                    error=ConflictError(
                        code=ErrorCode.INSUFFICIENT_STOCK,
                        message=f"Only {stock.available} units of {cmd.sku} available",
                        resource_type="Stock",
                        conflicting_field="quantity",
                        details={"available": stock.available},
                    )
                )

        order = Order.place(
            customer_id=cmd.customer_id,
            sku=cmd.sku,
            quantity=cmd.quantity,
            unit_price=cmd.unit_price,
            client_reference=cmd.client_reference,
        )
        try:
            await uow.orders.add(order)
        except PersistenceError as e:
            return Failure(
                error=storage_unavailable(e, logger=self._logger, context=context)
            )

        uow.record_event(
            OrderPlaced(
                order_id=order.id,
                customer_id=order.customer_id,
                sku=order.sku,
                quantity=order.quantity,
                total=order.total,
                correlation_id=context.correlation_id,
            )
        )
        self._logger.debug(
            "order_staged",
            order_id=str(order.id),
            customer_id=str(order.customer_id),
        )
        return Success(value=order.id)
