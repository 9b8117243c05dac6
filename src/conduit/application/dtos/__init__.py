"""Read models returned by query handlers."""

from conduit.application.dtos.order_dtos import OrderPage, OrderView

__all__ = ["OrderPage", "OrderView"]
