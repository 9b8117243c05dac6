"""Query handlers."""

from conduit.application.queries.handlers.get_order_handler import GetOrderHandler
from conduit.application.queries.handlers.list_customer_orders_handler import (
    ListCustomerOrdersHandler,
)

__all__ = ["GetOrderHandler", "ListCustomerOrdersHandler"]
