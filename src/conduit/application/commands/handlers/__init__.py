"""Command handlers."""

from conduit.application.commands.handlers.cancel_order_handler import (
    CancelOrderHandler,
)
from conduit.application.commands.handlers.create_order_handler import (
    CreateOrderHandler,
)

__all__ = ["CancelOrderHandler", "CreateOrderHandler"]
