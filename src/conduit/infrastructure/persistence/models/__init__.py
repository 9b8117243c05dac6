"""Database models."""

from conduit.infrastructure.persistence.models.order import OrderModel

__all__ = ["OrderModel"]
