"""Pytest configuration and shared fixtures.

This configuration ensures:
1. Settings load in the testing environment
2. Async tests are always marked for pytest-asyncio
3. Unit tests get an in-memory recording Unit of Work and a mock logger
4. Integration tests get an isolated SQLite database per test
"""

import inspect
import os
from collections.abc import AsyncIterator
from decimal import Decimal
from unittest.mock import MagicMock
from uuid import UUID

import pytest
import pytest_asyncio
from uuid_extensions import uuid7

os.environ.setdefault("CONDUIT_ENVIRONMENT", "testing")

from conduit.application.commands.order_commands import CreateOrder  # noqa: E402
from conduit.infrastructure.persistence.database import Database  # noqa: E402
from tests.utils.fakes import (  # noqa: E402
    RecordingSqlAlchemyUnitOfWork,
    RecordingUnitOfWork,
    StubInventory,
    UnitOfWorkFactory,
)

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """Mock logger implementing LoggerProtocol."""
    return MagicMock()


@pytest.fixture
def uow_factory() -> UnitOfWorkFactory:
    """Factory of in-memory recording units of work."""
    return UnitOfWorkFactory(RecordingUnitOfWork)


@pytest.fixture
def stub_inventory() -> StubInventory:
    return StubInventory()


@pytest.fixture
def customer_id() -> UUID:
    return uuid7()


@pytest.fixture
def create_order_command(customer_id: UUID) -> CreateOrder:
    """A CreateOrder command that passes every validation rule."""
    return CreateOrder(
        customer_id=customer_id,
        sku="WIDGET-1",
        quantity=2,
        unit_price=Decimal("19.99"),
    )


@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncIterator[Database]:
    """Fresh SQLite database (file-backed, one per test)."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'conduit-test.db'}")
    await db.create_all()
    try:
        yield db
    finally:
        await db.close()


@pytest.fixture
def sqlite_uow_factory(database: Database) -> UnitOfWorkFactory:
    """Factory of recording SQLAlchemy units of work on the test database."""
    return UnitOfWorkFactory(
        lambda: RecordingSqlAlchemyUnitOfWork(database.session_factory)
    )
