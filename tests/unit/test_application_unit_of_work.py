"""Unit tests for the Unit-of-Work state machine."""

from decimal import Decimal

import pytest
from uuid_extensions import uuid7

from conduit.application.unit_of_work import UnitOfWorkState
from conduit.core.errors import PersistenceError, UnitOfWorkStateError
from conduit.domain.events import OrderPlaced
from tests.utils.fakes import RecordingUnitOfWork


def _event() -> OrderPlaced:
    return OrderPlaced(
        order_id=uuid7(),
        customer_id=uuid7(),
        sku="SKU-1",
        quantity=1,
        total=Decimal("1.00"),
    )


@pytest.mark.unit
class TestUnitOfWorkTransitions:
    async def test_begin_commit(self):
        uow = RecordingUnitOfWork()

        await uow.begin()
        await uow.commit()

        assert uow.transitions == [
            UnitOfWorkState.IDLE,
            UnitOfWorkState.ACTIVE,
            UnitOfWorkState.COMMITTED,
        ]
        assert uow.backend_calls == ["begin", "commit"]

    async def test_begin_rollback(self):
        uow = RecordingUnitOfWork()

        await uow.begin()
        await uow.rollback()

        assert uow.state == UnitOfWorkState.ROLLED_BACK
        assert uow.backend_calls == ["begin", "rollback"]

    async def test_rollback_is_idempotent(self):
        uow = RecordingUnitOfWork()
        await uow.begin()

        await uow.rollback()
        await uow.rollback()

        assert uow.backend_calls == ["begin", "rollback"]

    async def test_commit_happens_at_most_once(self):
        uow = RecordingUnitOfWork()
        await uow.begin()
        await uow.commit()

        with pytest.raises(UnitOfWorkStateError):
            await uow.commit()
        with pytest.raises(UnitOfWorkStateError):
            await uow.rollback()

    async def test_cannot_commit_before_begin(self):
        uow = RecordingUnitOfWork()

        with pytest.raises(UnitOfWorkStateError):
            await uow.commit()
        with pytest.raises(UnitOfWorkStateError):
            await uow.rollback()

    async def test_cannot_begin_twice(self):
        uow = RecordingUnitOfWork()
        await uow.begin()

        with pytest.raises(UnitOfWorkStateError):
            await uow.begin()

    async def test_failed_commit_rolls_back_and_reraises(self):
        uow = RecordingUnitOfWork(commit_error=PersistenceError("disk full"))
        await uow.begin()

        with pytest.raises(PersistenceError):
            await uow.commit()

        assert uow.state == UnitOfWorkState.ROLLED_BACK
        assert uow.backend_calls == ["begin", "commit", "rollback"]


@pytest.mark.unit
class TestUnitOfWorkEvents:
    async def test_events_released_after_commit(self):
        uow = RecordingUnitOfWork()
        await uow.begin()
        first, second = _event(), _event()
        uow.record_event(first)
        uow.record_event(second)

        await uow.commit()

        assert uow.collect_events() == [first, second]
        assert uow.collect_events() == []

    async def test_events_unavailable_before_commit(self):
        uow = RecordingUnitOfWork()
        await uow.begin()
        uow.record_event(_event())

        with pytest.raises(UnitOfWorkStateError):
            uow.collect_events()

    async def test_events_discarded_on_rollback(self):
        uow = RecordingUnitOfWork()
        await uow.begin()
        uow.record_event(_event())

        await uow.rollback()

        with pytest.raises(UnitOfWorkStateError):
            uow.collect_events()
        assert uow._pending_events == []

    async def test_record_event_requires_active_unit(self):
        uow = RecordingUnitOfWork()

        with pytest.raises(UnitOfWorkStateError):
            uow.record_event(_event())


@pytest.mark.unit
class TestUnitOfWorkContextManager:
    async def test_exit_without_commit_rolls_back(self):
        async with RecordingUnitOfWork() as uow:
            assert uow.is_active

        assert uow.state == UnitOfWorkState.ROLLED_BACK

    async def test_exit_with_exception_rolls_back(self):
        uow = RecordingUnitOfWork()

        with pytest.raises(RuntimeError):
            async with uow:
                raise RuntimeError("handler failed")

        assert uow.state == UnitOfWorkState.ROLLED_BACK

    async def test_exit_after_commit_keeps_commit(self):
        async with RecordingUnitOfWork() as uow:
            await uow.commit()

        assert uow.state == UnitOfWorkState.COMMITTED
