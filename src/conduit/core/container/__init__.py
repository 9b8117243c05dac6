"""Container module - Centralized dependency injection.

The container is organized into modules by concern:
- infrastructure: logging, database, event bus, resilience, inventory
- handler_factory: auto-wiring of handler constructors
- pipeline: handler registry, dispatcher, pipeline, gateway

Usage:
    from conduit.core.container import get_gateway

    envelope = await get_gateway().submit("CreateOrder", payload)
"""

from conduit.core.container.handler_factory import (
    analyze_handler_dependencies,
    create_handler,
    get_supported_dependencies,
    get_type_name,
)
from conduit.core.container.infrastructure import (
    get_database,
    get_event_bus,
    get_inventory_gateway,
    get_logger,
    get_resilient_caller,
    get_unit_of_work_factory,
)
from conduit.core.container.pipeline import (
    get_dispatcher,
    get_gateway,
    get_handler_registry,
    get_pipeline,
)


def reset_container() -> None:
    """Clear every cached singleton (settings included)."""
    from conduit.core.config import get_settings

    for factory in (
        get_settings,
        get_logger,
        get_database,
        get_event_bus,
        get_resilient_caller,
        get_inventory_gateway,
        get_handler_registry,
        get_dispatcher,
        get_pipeline,
        get_gateway,
    ):
        factory.cache_clear()


__all__ = [
    # Infrastructure
    "get_logger",
    "get_database",
    "get_unit_of_work_factory",
    "get_event_bus",
    "get_resilient_caller",
    "get_inventory_gateway",
    # Handler factory
    "create_handler",
    "analyze_handler_dependencies",
    "get_type_name",
    "get_supported_dependencies",
    # Pipeline
    "get_handler_registry",
    "get_dispatcher",
    "get_pipeline",
    "get_gateway",
    "reset_container",
]
