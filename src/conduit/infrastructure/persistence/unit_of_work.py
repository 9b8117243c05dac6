"""SQLAlchemy-backed Unit of Work.

One AsyncSession per unit, taken from the database session factory when
the unit begins and closed when it commits or rolls back. Repositories
exposed by the unit share that session, so everything a handler stages
commits or rolls back together.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from conduit.application.unit_of_work import UnitOfWork
from conduit.core.errors import PersistenceError, UnitOfWorkStateError
from conduit.infrastructure.persistence.repositories.order_repository import (
    SqlAlchemyOrderRepository,
)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Unit of Work over an AsyncSession.

    Example:
        >>> uow = SqlAlchemyUnitOfWork(database.session_factory)
        >>> await uow.begin()
        >>> await uow.orders.add(order)
        >>> await uow.commit()
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__()
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self._orders: SqlAlchemyOrderRepository | None = None

    @property
    def orders(self) -> SqlAlchemyOrderRepository:
        """Order repository bound to this unit's session.

        Raises:
            UnitOfWorkStateError: If the unit has not begun.
        """
        if self._orders is None:
            raise UnitOfWorkStateError("Unit of work has not begun")
        return self._orders

    async def _begin(self) -> None:
        self._session = self._session_factory()
        self._orders = SqlAlchemyOrderRepository(self._session)

    async def _commit(self) -> None:
        session = self._require_session()
        try:
            await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError("Commit failed") from e
        await self._close()

    async def _rollback(self) -> None:
        if self._session is None:
            return
        try:
            await self._session.rollback()
        except SQLAlchemyError as e:
            raise PersistenceError("Rollback failed") from e
        finally:
            await self._close()

    async def _close(self) -> None:
        session, self._session = self._session, None
        self._orders = None
        if session is not None:
            await session.close()

    def _require_session(self) -> AsyncSession:
        if self._session is None:
            raise UnitOfWorkStateError("Unit of work has no open session")
        return self._session
