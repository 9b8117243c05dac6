"""GetOrder query handler.

Queries run inside a unit of work like commands; they stage no writes,
so the commit is a no-op for the backend.
"""

from typing import TYPE_CHECKING

from conduit.application.dtos import OrderView
from conduit.application.errors import storage_unavailable
from conduit.application.queries.order_queries import GetOrder
from conduit.core.enums import ErrorCode
from conduit.core.errors import DependencyError, NotFoundError, PersistenceError
from conduit.core.result import Failure, Result, Success
from conduit.domain.protocols import LoggerProtocol, OrderUnitOfWork

if TYPE_CHECKING:
    from conduit.application.pipeline.context import CorrelationContext


class GetOrderHandler:
    """Handler for GetOrder query."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def handle(
        self,
        query: GetOrder,
        context: "CorrelationContext",
        uow: OrderUnitOfWork,
    ) -> Result[OrderView, NotFoundError | DependencyError]:
        """Fetch one order.

        Returns:
            Success(OrderView) or Failure(NotFoundError | DependencyError).
        """
        try:
            order = await uow.orders.find_by_id(query.order_id)
        except PersistenceError as e:
            return Failure(
                error=storage_unavailable(e, logger=self._logger, context=context)
            )
        if order is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.ORDER_NOT_FOUND,
                    message="Order not found",
                    resource_type="Order",
                    resource_id=str(query.order_id),
                )
            )
        return Success(value=OrderView.from_entity(order))
