"""CancelOrder command handler."""

from typing import TYPE_CHECKING

from conduit.application.commands.order_commands import CancelOrder
from conduit.application.errors import storage_unavailable
from conduit.core.enums import ErrorCode
from conduit.core.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    PersistenceError,
)
from conduit.core.result import Failure, Result, Success
from conduit.domain.events import OrderCancelled
from conduit.domain.protocols import LoggerProtocol, OrderUnitOfWork

if TYPE_CHECKING:
    from conduit.application.pipeline.context import CorrelationContext


class CancelOrderHandler:
    """Handler for CancelOrder command.

    Only PLACED orders can be cancelled; cancelling twice is a conflict.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def handle(
        self,
        cmd: CancelOrder,
        context: "CorrelationContext",
        uow: OrderUnitOfWork,
    ) -> Result[None, NotFoundError | ConflictError | DependencyError]:
        try:
            order = await uow.orders.find_by_id(cmd.order_id)
            if order is None:
                return Failure(
                    error=NotFoundError(
                        code=ErrorCode.ORDER_NOT_FOUND,
                        message="Order not found",
                        resource_type="Order",
                        resource_id=str(cmd.order_id),
                    )
                )
            if not order.can_cancel():
                return Failure(
                    error=ConflictError(
                        code=ErrorCode.ORDER_NOT_CANCELLABLE,
                        message=f"Order is already {order.status.value}",
                        resource_type="Order",
                        conflicting_field="status",
                    )
                )

            order.cancel(cmd.reason)
            await uow.orders.update(order)
        except PersistenceError as e:
            return Failure(
                error=storage_unavailable(e, logger=self._logger, context=context)
            )

        uow.record_event(
            OrderCancelled(
                order_id=order.id,
                customer_id=order.customer_id,
                reason=cmd.reason,
                correlation_id=context.correlation_id,
            )
        )
        self._logger.debug("order_cancel_staged", order_id=str(order.id))
        return Success(value=None)
