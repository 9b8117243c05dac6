"""Declarative base for the order store.

Every table gets a UUID primary key and created/updated timestamps. The
timestamps are normally supplied by the repository from the domain entity;
the column defaults only cover rows written without one.

Domain entities never subclass these models; repositories map between them.
"""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_extensions import uuid7


def _now() -> datetime:
    return datetime.now(UTC)


class BaseModel(DeclarativeBase):
    """Metadata root shared by all tables."""


class TimestampedModel(BaseModel):
    """Abstract table with id, created_at and updated_at.

    ``Uuid`` maps to a native UUID column on PostgreSQL and to CHAR(32) on
    SQLite, so the same model serves both.
    """

    __abstract__ = True

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid7)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"
