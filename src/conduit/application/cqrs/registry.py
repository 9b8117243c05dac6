"""CQRS Registry - Single Source of Truth for Commands and Queries.

This catalog lists ALL commands and queries with their metadata.
Used for:
- Handler registry build at startup (one handler per request type)
- Validation stage (declared cross-field rules)
- Compliance tests (verify no drift between requests and handlers)

Adding new commands/queries:
1. Define the request dataclass in commands/ or queries/
2. Create handler class in the matching handlers/ directory
3. Add entry to COMMAND_REGISTRY or QUERY_REGISTRY below
4. Run tests - they'll tell you what's missing
"""

from conduit.application.commands.handlers.cancel_order_handler import (
    CancelOrderHandler,
)
from conduit.application.commands.handlers.create_order_handler import (
    CreateOrderHandler,
)
from conduit.application.commands.order_commands import CancelOrder, CreateOrder
from conduit.application.cqrs.metadata import (
    CommandMetadata,
    CQRSCategory,
    QueryMetadata,
)
from conduit.application.queries.handlers.get_order_handler import GetOrderHandler
from conduit.application.queries.handlers.list_customer_orders_handler import (
    ListCustomerOrdersHandler,
)
from conduit.application.queries.order_queries import GetOrder, ListCustomerOrders
from conduit.core.constants import MAX_ORDER_TOTAL
from conduit.core.validation import require_not_blank, require_product_at_most

# ═══════════════════════════════════════════════════════════════════════════
# Command Registry
# ═══════════════════════════════════════════════════════════════════════════

COMMAND_REGISTRY: list[CommandMetadata] = [
    CommandMetadata(
        command_class=CreateOrder,
        handler_class=CreateOrderHandler,
        category=CQRSCategory.ORDERS,
        rules=(
            require_product_at_most(
                "quantity", "unit_price", MAX_ORDER_TOTAL, field="unit_price"
            ),
        ),
        description="Place an order after checking stock with the inventory service",
    ),
    CommandMetadata(
        command_class=CancelOrder,
        handler_class=CancelOrderHandler,
        category=CQRSCategory.ORDERS,
        rules=(require_not_blank("reason"),),
        description="Cancel a placed order",
    ),
]

# ═══════════════════════════════════════════════════════════════════════════
# Query Registry
# ═══════════════════════════════════════════════════════════════════════════

QUERY_REGISTRY: list[QueryMetadata] = [
    QueryMetadata(
        query_class=GetOrder,
        handler_class=GetOrderHandler,
        category=CQRSCategory.ORDERS,
        description="Fetch one order by ID",
    ),
    QueryMetadata(
        query_class=ListCustomerOrders,
        handler_class=ListCustomerOrdersHandler,
        category=CQRSCategory.ORDERS,
        is_paginated=True,
        description="List a customer's orders, newest first",
    ),
]
