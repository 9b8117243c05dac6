"""SQLAlchemy async persistence: database, models, repositories, unit of work."""

from conduit.infrastructure.persistence.base import BaseModel, TimestampedModel
from conduit.infrastructure.persistence.database import Database
from conduit.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork

__all__ = ["BaseModel", "TimestampedModel", "Database", "SqlAlchemyUnitOfWork"]
