"""ListCustomerOrders query handler."""

from typing import TYPE_CHECKING

from conduit.application.dtos import OrderPage, OrderView
from conduit.application.errors import storage_unavailable
from conduit.application.queries.order_queries import ListCustomerOrders
from conduit.core.errors import DependencyError, PersistenceError
from conduit.core.result import Failure, Result, Success
from conduit.domain.protocols import LoggerProtocol, OrderUnitOfWork

if TYPE_CHECKING:
    from conduit.application.pipeline.context import CorrelationContext


class ListCustomerOrdersHandler:
    """Handler for ListCustomerOrders query.

    An unknown customer yields an empty page, not NotFoundError.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def handle(
        self,
        query: ListCustomerOrders,
        context: "CorrelationContext",
        uow: OrderUnitOfWork,
    ) -> Result[OrderPage, DependencyError]:
        try:
            orders = await uow.orders.list_by_customer(
                query.customer_id,
                status=query.status,
                limit=query.limit,
                offset=query.offset,
            )
            total_count = await uow.orders.count_by_customer(
                query.customer_id, status=query.status
            )
        except PersistenceError as e:
            return Failure(
                error=storage_unavailable(e, logger=self._logger, context=context)
            )
        return Success(
            value=OrderPage(
                items=tuple(OrderView.from_entity(order) for order in orders),
                total_count=total_count,
                limit=query.limit,
                offset=query.offset,
            )
        )
