"""Unit tests for handler auto-wiring."""

from unittest.mock import MagicMock

import pytest

from conduit.application.commands.handlers import CreateOrderHandler
from conduit.application.queries.handlers import GetOrderHandler
from conduit.core.container import handler_factory
from conduit.core.container.handler_factory import (
    analyze_handler_dependencies,
    create_handler,
    get_supported_dependencies,
    get_type_name,
)
from conduit.core.errors import ConfigurationError
from conduit.domain.protocols import InventoryGatewayProtocol, LoggerProtocol
from tests.utils.requests import LookupHandler


class NeedsUnknown:
    def __init__(self, clock: MagicMock) -> None:
        self.clock = clock


class OptionalTracer:
    def __init__(self, tracer: MagicMock | None = None) -> None:
        self.tracer = tracer


@pytest.mark.unit
class TestTypeNames:
    def test_class_and_forward_reference(self):
        assert get_type_name(LoggerProtocol) == "LoggerProtocol"
        assert get_type_name("conduit.domain.protocols.LoggerProtocol") == "LoggerProtocol"

    def test_optional_unwrapped(self):
        assert get_type_name(InventoryGatewayProtocol | None) == "InventoryGatewayProtocol"

    def test_supported_dependencies(self):
        assert set(get_supported_dependencies()) == {
            "EventBusProtocol",
            "InventoryGatewayProtocol",
            "LoggerProtocol",
        }


@pytest.mark.unit
class TestAnalyzeDependencies:
    def test_handler_without_init(self):
        assert analyze_handler_dependencies(LookupHandler) == {}

    def test_query_handler_takes_logger(self):
        deps = analyze_handler_dependencies(GetOrderHandler)

        assert {name: dep.type_name for name, dep in deps.items()} == {
            "logger": "LoggerProtocol"
        }

    def test_reads_constructor_hints(self):
        deps = analyze_handler_dependencies(CreateOrderHandler)

        assert {name: dep.type_name for name, dep in deps.items()} == {
            "inventory": "InventoryGatewayProtocol",
            "logger": "LoggerProtocol",
        }
        assert not any(dep.optional for dep in deps.values())

    def test_optional_flag(self):
        deps = analyze_handler_dependencies(OptionalTracer)

        assert deps["tracer"].optional is True


@pytest.mark.unit
class TestCreateHandler:
    def test_overrides_win(self, mock_logger, stub_inventory):
        handler = create_handler(
            CreateOrderHandler, inventory=stub_inventory, logger=mock_logger
        )

        assert handler._inventory is stub_inventory
        assert handler._logger is mock_logger

    def test_singletons_resolved_from_container(self, monkeypatch, mock_logger):
        inventory = MagicMock()
        from conduit.core.container import infrastructure

        monkeypatch.setattr(infrastructure, "get_inventory_gateway", lambda: inventory)
        monkeypatch.setattr(infrastructure, "get_logger", lambda: mock_logger)

        handler = create_handler(CreateOrderHandler)

        assert handler._inventory is inventory
        assert handler._logger is mock_logger

    def test_optional_unresolved_becomes_none(self):
        assert create_handler(OptionalTracer).tracer is None

    def test_unresolvable_dependency_raises(self):
        with pytest.raises(ConfigurationError, match="clock"):
            create_handler(NeedsUnknown)

    def test_unknown_singleton_type_raises(self):
        with pytest.raises(ConfigurationError):
            handler_factory._service("CacheProtocol")
