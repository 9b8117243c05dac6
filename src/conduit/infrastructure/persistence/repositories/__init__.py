"""Repository implementations (adapters for domain repository protocols)."""

from conduit.infrastructure.persistence.repositories.order_repository import (
    SqlAlchemyOrderRepository,
)

__all__ = ["SqlAlchemyOrderRepository"]
