"""Domain entities."""

from conduit.domain.entities.order import Order

__all__ = ["Order"]
