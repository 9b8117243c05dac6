"""Unit tests for container wiring.

Builds the real object graph from settings (SQLite in a temp dir, no
network) and checks it is assembled and cached as expected.
"""

import pytest
import pytest_asyncio
import structlog

from conduit.application.commands.order_commands import CancelOrder, CreateOrder
from conduit.application.queries.order_queries import GetOrder, ListCustomerOrders
from conduit.application.unit_of_work import UnitOfWorkState
from conduit.core.config import get_settings
from conduit.core.container import (
    get_database,
    get_event_bus,
    get_gateway,
    get_handler_registry,
    get_pipeline,
    get_resilient_caller,
    get_unit_of_work_factory,
    reset_container,
)
from conduit.domain.events import OrderCancelled, OrderPlaced


@pytest_asyncio.fixture(autouse=True)
async def container_env(monkeypatch, tmp_path):
    monkeypatch.setenv("CONDUIT_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'c.db'}")
    monkeypatch.setenv("CONDUIT_REQUEST_TIMEOUT_SECONDS", "7.5")
    monkeypatch.setenv("CONDUIT_CIRCUIT_BREAKER_FAILURE_THRESHOLD", "2")
    reset_container()
    yield
    await get_database().close()
    reset_container()
    structlog.reset_defaults()


@pytest.mark.unit
class TestContainer:
    async def test_reset_container_clears_singletons(self):
        settings = get_settings()
        registry = get_handler_registry()

        reset_container()

        assert get_settings() is not settings
        assert get_handler_registry() is not registry

    async def test_registry_covers_catalog(self):
        registry = get_handler_registry()

        for request_class in (CreateOrder, CancelOrder, GetOrder, ListCustomerOrders):
            assert request_class in registry
        assert len(registry) == 4

    async def test_pipeline_uses_configured_timeout(self):
        pipeline = get_pipeline()

        assert pipeline is get_pipeline()
        assert pipeline._request_timeout == 7.5
        assert pipeline.registry is get_handler_registry()

    async def test_gateway_exposes_every_request_type(self):
        assert set(get_gateway().entry_points()) == {
            "CreateOrder",
            "CancelOrder",
            "GetOrder",
            "ListCustomerOrders",
        }

    async def test_unit_of_work_factory_creates_fresh_units(self):
        factory = get_unit_of_work_factory()

        first, second = factory(), factory()

        assert first is not second
        assert first.state == UnitOfWorkState.IDLE

    async def test_one_resilient_caller_per_dependency(self):
        inventory = get_resilient_caller("inventory")

        assert get_resilient_caller("inventory") is inventory
        assert get_resilient_caller("billing") is not inventory
        assert inventory.breaker.name == "inventory"

        for _ in range(2):
            inventory.breaker.record_failure()
        assert inventory.breaker.allow_request() is False

    async def test_event_bus_has_logging_subscribers(self):
        bus = get_event_bus()

        assert bus.handler_count(OrderPlaced) == 1
        assert bus.handler_count(OrderCancelled) == 1
