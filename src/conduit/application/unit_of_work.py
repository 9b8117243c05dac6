"""Unit-of-Work boundary.

The Unit of Work spans exactly one request. It is an explicit state
machine owned by the dispatcher:

    IDLE --begin--> ACTIVE --commit--> COMMITTED
                           --rollback--> ROLLED_BACK

Terminal states are absorbing. Commit is attempted at most once; if the
backend commit fails the unit rolls back, ends ROLLED_BACK and the error
propagates. Domain events recorded while ACTIVE are released only after a
successful commit and discarded on rollback.

Backends (e.g. SqlAlchemyUnitOfWork) implement ``_begin``, ``_commit`` and
``_rollback``; the base class enforces the transitions.

Usage:
    uow = uow_factory()
    await uow.begin()
    try:
        result = await handler.handle(request, context, uow)
    except BaseException:
        await uow.rollback()
        raise
"""

from abc import ABC, abstractmethod
from enum import Enum
from types import TracebackType
from typing import Self

from conduit.core.errors import UnitOfWorkStateError
from conduit.domain.events.base_event import DomainEvent


class UnitOfWorkState(str, Enum):
    """Lifecycle states of a unit of work."""

    IDLE = "idle"
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class UnitOfWork(ABC):
    """Unit of Work base (port with the state machine built in).

    Manages one transaction, ensures atomicity of the handler's writes, and
    collects domain events for dispatch after commit. Can be used as an
    async context manager: entering begins the unit, leaving it with an
    exception (or without having committed) rolls back.
    """

    def __init__(self) -> None:
        self._state = UnitOfWorkState.IDLE
        self._pending_events: list[DomainEvent] = []

    @property
    def state(self) -> UnitOfWorkState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state == UnitOfWorkState.ACTIVE

    async def begin(self) -> None:
        """Open the unit (IDLE -> ACTIVE).

        Raises:
            UnitOfWorkStateError: If the unit was already begun.
        """
        self._require(UnitOfWorkState.IDLE, "begin")
        await self._begin()
        self._state = UnitOfWorkState.ACTIVE

    async def commit(self) -> None:
        """Durably apply staged writes (ACTIVE -> COMMITTED).

        If the backend commit raises, the unit is rolled back, ends
        ROLLED_BACK, and the original error propagates.

        Raises:
            UnitOfWorkStateError: If the unit is not ACTIVE.
        """
        self._require(UnitOfWorkState.ACTIVE, "commit")
        try:
            await self._commit()
        except BaseException:
            await self._finish_rollback()
            raise
        self._state = UnitOfWorkState.COMMITTED

    async def rollback(self) -> None:
        """Discard staged writes and events (ACTIVE -> ROLLED_BACK).

        Idempotent once ROLLED_BACK.

        Raises:
            UnitOfWorkStateError: If the unit is IDLE or COMMITTED.
        """
        if self._state == UnitOfWorkState.ROLLED_BACK:
            return
        self._require(UnitOfWorkState.ACTIVE, "rollback")
        await self._finish_rollback()

    def record_event(self, event: DomainEvent) -> None:
        """Stage a domain event for publication after commit.

        Raises:
            UnitOfWorkStateError: If the unit is not ACTIVE.
        """
        self._require(UnitOfWorkState.ACTIVE, "record_event")
        self._pending_events.append(event)

    def collect_events(self) -> list[DomainEvent]:
        """Release the events recorded in this unit, in recording order.

        Raises:
            UnitOfWorkStateError: If the unit has not committed.
        """
        self._require(UnitOfWorkState.COMMITTED, "collect_events")
        events, self._pending_events = self._pending_events, []
        return events

    async def __aenter__(self) -> Self:
        await self.begin()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._state == UnitOfWorkState.ACTIVE:
            await self.rollback()

    async def _finish_rollback(self) -> None:
        self._pending_events.clear()
        try:
            await self._rollback()
        finally:
            self._state = UnitOfWorkState.ROLLED_BACK

    def _require(self, expected: UnitOfWorkState, operation: str) -> None:
        if self._state != expected:
            raise UnitOfWorkStateError(
                f"Cannot {operation} a unit of work in state "
                f"{self._state.value} (expected {expected.value})"
            )

    @abstractmethod
    async def _begin(self) -> None:
        """Open the backend transaction."""

    @abstractmethod
    async def _commit(self) -> None:
        """Commit the backend transaction."""

    @abstractmethod
    async def _rollback(self) -> None:
        """Roll back the backend transaction and release resources."""
