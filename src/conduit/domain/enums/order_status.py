"""Order lifecycle status."""

from enum import Enum


class OrderStatus(str, Enum):
    """Order status.

    PLACED orders can be cancelled; CANCELLED is terminal.
    """

    PLACED = "placed"
    CANCELLED = "cancelled"
