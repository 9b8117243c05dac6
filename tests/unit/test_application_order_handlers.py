"""Unit tests for order command and query handlers.

Handlers run against an ACTIVE RecordingUnitOfWork whose order repository
is an AsyncMock; no pipeline is involved.
"""

from dataclasses import replace
from decimal import Decimal
from uuid import UUID

import pytest
import pytest_asyncio
from uuid_extensions import uuid7

from conduit.application.commands.handlers import (
    CancelOrderHandler,
    CreateOrderHandler,
)
from conduit.application.commands.order_commands import CancelOrder
from conduit.application.pipeline.context import CorrelationContext
from conduit.application.queries.handlers import (
    GetOrderHandler,
    ListCustomerOrdersHandler,
)
from conduit.application.queries.order_queries import GetOrder, ListCustomerOrders
from conduit.core.enums import ErrorCode, ErrorKind
from conduit.core.errors import DependencyError, PersistenceError
from conduit.core.result import Failure, Success
from conduit.domain.entities.order import Order
from conduit.domain.enums import OrderStatus
from conduit.domain.events import OrderCancelled, OrderPlaced
from tests.utils.fakes import RecordingUnitOfWork, StubInventory, logged


def _order(customer_id: UUID, **overrides) -> Order:
    order = Order.place(
        customer_id=customer_id,
        sku="WIDGET-1",
        quantity=2,
        unit_price=Decimal("19.99"),
    )
    for name, value in overrides.items():
        setattr(order, name, value)
    return order


@pytest_asyncio.fixture
async def uow() -> RecordingUnitOfWork:
    unit = RecordingUnitOfWork()
    await unit.begin()
    return unit


def _context(request) -> CorrelationContext:
    return CorrelationContext.for_request(request, correlation_id="corr-h")


async def _committed_events(uow: RecordingUnitOfWork) -> list:
    await uow.commit()
    return uow.collect_events()


@pytest.mark.unit
class TestCreateOrderHandler:
    async def test_places_order_and_records_event(
        self, create_order_command, stub_inventory, mock_logger, uow
    ):
        handler = CreateOrderHandler(inventory=stub_inventory, logger=mock_logger)

        result = await handler.handle(
            create_order_command, _context(create_order_command), uow
        )

        assert isinstance(result, Success)
        assert isinstance(result.value, UUID)
        [staged] = uow.orders.add.await_args.args
        assert staged.id == result.value
        assert staged.status == OrderStatus.PLACED
        assert stub_inventory.calls == [("WIDGET-1", 2)]

        [event] = await _committed_events(uow)
        assert isinstance(event, OrderPlaced)
        assert event.order_id == result.value
        assert event.total == Decimal("39.98")
        assert event.correlation_id == "corr-h"

    async def test_duplicate_client_reference_is_conflict(
        self, create_order_command, stub_inventory, mock_logger, uow
    ):
        command = replace(create_order_command, client_reference="ref-1")
        uow.orders.find_by_client_reference.return_value = _order(
            command.customer_id, client_reference="ref-1"
        )
        handler = CreateOrderHandler(inventory=stub_inventory, logger=mock_logger)

        result = await handler.handle(command, _context(command), uow)

        assert result.error.kind == ErrorKind.CONFLICT
        assert result.error.code == ErrorCode.ORDER_ALREADY_EXISTS
        assert result.error.conflicting_field == "client_reference"
        assert stub_inventory.calls == []
        uow.orders.add.assert_not_awaited()

    async def test_reference_lookup_skipped_without_reference(
        self, create_order_command, stub_inventory, mock_logger, uow
    ):
        handler = CreateOrderHandler(inventory=stub_inventory, logger=mock_logger)

        await handler.handle(create_order_command, _context(create_order_command), uow)

        uow.orders.find_by_client_reference.assert_not_awaited()

    async def test_insufficient_stock_is_conflict(
        self, create_order_command, mock_logger, uow
    ):
        handler = CreateOrderHandler(
            inventory=StubInventory(available=1), logger=mock_logger
        )

        result = await handler.handle(
            create_order_command, _context(create_order_command), uow
        )

        assert result.error.code == ErrorCode.INSUFFICIENT_STOCK
        assert result.error.details == {"available": 1}
        uow.orders.add.assert_not_awaited()

    async def test_inventory_failure_returned_unchanged(
        self, create_order_command, mock_logger, uow
    ):
        error = DependencyError(
            code=ErrorCode.EXTERNAL_SERVICE_UNAVAILABLE,
            message="Inventory service unavailable",
            dependency="inventory",
        )

        class DownInventory:
            async def check_availability(self, sku, quantity):
                return Failure(error=error)

        handler = CreateOrderHandler(inventory=DownInventory(), logger=mock_logger)

        result = await handler.handle(
            create_order_command, _context(create_order_command), uow
        )

        assert result == Failure(error=error)

    async def test_storage_failure_becomes_dependency_error(
        self, create_order_command, stub_inventory, mock_logger, uow
    ):
        uow.orders.add.side_effect = PersistenceError("disk full")
        handler = CreateOrderHandler(inventory=stub_inventory, logger=mock_logger)

        result = await handler.handle(
            create_order_command, _context(create_order_command), uow
        )

        assert result.error.kind == ErrorKind.DEPENDENCY
        assert result.error.code == ErrorCode.PERSISTENCE_FAILED
        assert result.error.dependency == "persistence"
        assert result.error.details is None
        assert logged(mock_logger, "order_storage_failed")
        assert await _committed_events(uow) == []


@pytest.mark.unit
class TestCancelOrderHandler:
    async def test_cancels_placed_order(self, customer_id, mock_logger, uow):
        order = _order(customer_id)
        uow.orders.find_by_id.return_value = order
        command = CancelOrder(order_id=order.id, reason="Changed my mind")

        result = await CancelOrderHandler(logger=mock_logger).handle(
            command, _context(command), uow
        )

        assert result == Success(value=None)
        uow.orders.update.assert_awaited_once_with(order)
        assert order.status == OrderStatus.CANCELLED
        assert order.cancellation_reason == "Changed my mind"
        [event] = await _committed_events(uow)
        assert isinstance(event, OrderCancelled)
        assert event.reason == "Changed my mind"

    async def test_missing_order_is_not_found(self, mock_logger, uow):
        command = CancelOrder(order_id=uuid7(), reason="Changed my mind")
        uow.orders.find_by_id.return_value = None

        result = await CancelOrderHandler(logger=mock_logger).handle(
            command, _context(command), uow
        )

        assert result.error.code == ErrorCode.ORDER_NOT_FOUND
        assert result.error.resource_id == str(command.order_id)

    async def test_cancelling_twice_is_conflict(self, customer_id, mock_logger, uow):
        order = _order(customer_id, status=OrderStatus.CANCELLED)
        uow.orders.find_by_id.return_value = order
        command = CancelOrder(order_id=order.id, reason="Changed my mind")

        result = await CancelOrderHandler(logger=mock_logger).handle(
            command, _context(command), uow
        )

        assert result.error.code == ErrorCode.ORDER_NOT_CANCELLABLE
        uow.orders.update.assert_not_awaited()


@pytest.mark.unit
class TestOrderQueryHandlers:
    async def test_get_order_returns_view(self, customer_id, mock_logger, uow):
        order = _order(customer_id)
        uow.orders.find_by_id.return_value = order
        query = GetOrder(order_id=order.id)

        result = await GetOrderHandler(logger=mock_logger).handle(
            query, _context(query), uow
        )

        assert result.value.id == order.id
        assert result.value.total == Decimal("39.98")
        assert result.value.status == OrderStatus.PLACED

    async def test_get_missing_order_is_not_found(self, mock_logger, uow):
        uow.orders.find_by_id.return_value = None
        query = GetOrder(order_id=uuid7())

        result = await GetOrderHandler(logger=mock_logger).handle(
            query, _context(query), uow
        )

        assert result.error.kind == ErrorKind.NOT_FOUND

    async def test_get_order_storage_failure(self, mock_logger, uow):
        uow.orders.find_by_id.side_effect = PersistenceError("connection lost")
        query = GetOrder(order_id=uuid7())

        result = await GetOrderHandler(logger=mock_logger).handle(
            query, _context(query), uow
        )

        assert result.error.code == ErrorCode.PERSISTENCE_FAILED
        assert result.error.details is None
        [(level, context)] = logged(mock_logger, "order_storage_failed")
        assert level == "warning"
        assert context["error_message"] == "connection lost"

    async def test_list_returns_page(self, customer_id, mock_logger, uow):
        orders = [_order(customer_id), _order(customer_id)]
        uow.orders.list_by_customer.return_value = orders
        uow.orders.count_by_customer.return_value = 5
        query = ListCustomerOrders(customer_id=customer_id, limit=2, offset=0)

        result = await ListCustomerOrdersHandler(logger=mock_logger).handle(
            query, _context(query), uow
        )

        page = result.value
        assert [view.id for view in page.items] == [o.id for o in orders]
        assert page.total_count == 5
        assert page.has_more is True
        uow.orders.list_by_customer.assert_awaited_once_with(
            customer_id, status=None, limit=2, offset=0
        )

    async def test_unknown_customer_yields_empty_page(self, mock_logger, uow):
        uow.orders.list_by_customer.return_value = []
        uow.orders.count_by_customer.return_value = 0
        query = ListCustomerOrders(customer_id=uuid7())

        result = await ListCustomerOrdersHandler(logger=mock_logger).handle(
            query, _context(query), uow
        )

        assert result.value.items == ()
        assert result.value.has_more is False
