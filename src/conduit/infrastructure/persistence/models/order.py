"""Order database model."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import DateTime, Index, Numeric, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from conduit.infrastructure.persistence.base import TimestampedModel


class OrderModel(TimestampedModel):
    """Order table.

    A client reference is unique per customer (NULLs do not collide).
    """

    __tablename__ = "orders"
    __table_args__ = (
        UniqueConstraint(
            "customer_id", "client_reference", name="uq_orders_customer_reference"
        ),
        Index("ix_orders_customer_created", "customer_id", "created_at"),
    )

    customer_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    sku: Mapped[str] = mapped_column(String(32), nullable=False)
    quantity: Mapped[int] = mapped_column(nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    client_reference: Mapped[str | None] = mapped_column(String(64), nullable=True)
    cancellation_reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
