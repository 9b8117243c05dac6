"""Domain enums."""

from conduit.domain.enums.order_status import OrderStatus

__all__ = ["OrderStatus"]
