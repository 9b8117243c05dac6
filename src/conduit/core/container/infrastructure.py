"""Infrastructure dependency factories.

Application-scoped singletons for the services the pipeline and handlers
depend on:
- Logging (structlog console adapter)
- Database (SQLAlchemy async engine)
- Event bus (in-memory, with logging subscribers)
- Resilient callers (retry + circuit breaker per dependency)
- Inventory gateway (httpx)

Every factory is cached with lru_cache; tests reset them with
``reset_container()`` from conduit.core.container.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from conduit.core.config import get_settings
from conduit.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from conduit.application.pipeline.dispatcher import UnitOfWorkFactory
    from conduit.domain.protocols import (
        EventBusProtocol,
        InventoryGatewayProtocol,
        LoggerProtocol,
        ResilientCallerProtocol,
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from conduit.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns:
        Database manager instance.
    """
    settings = get_settings()
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


def get_unit_of_work_factory() -> "UnitOfWorkFactory":
    """Return a factory producing one fresh SQLAlchemy unit of work per request."""
    from conduit.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork

    session_factory = get_database().session_factory
    return lambda: SqlAlchemyUnitOfWork(session_factory)


@lru_cache()
def get_event_bus() -> "EventBusProtocol":
    """Get event bus singleton (app-scoped).

    Subscribers are registered once, here. Handlers that fail are logged by
    the bus and never reach the request that published the event.

    Returns:
        Event bus implementing EventBusProtocol.
    """
    from conduit.infrastructure.events.handlers.logging_event_handler import (
        LoggingEventHandler,
    )
    from conduit.infrastructure.events.in_memory_event_bus import InMemoryEventBus

    logger = get_logger()
    event_bus = InMemoryEventBus(logger=logger)
    LoggingEventHandler(logger).register(event_bus)
    return event_bus


@lru_cache()
def get_resilient_caller(name: str) -> "ResilientCallerProtocol":
    """Get the resilient caller for one external dependency.

    One caller (and one circuit breaker) per dependency name, so a failing
    dependency never opens the circuit of another.

    Args:
        name: Dependency name, e.g. "inventory".
    """
    from conduit.infrastructure.resilience.circuit_breaker import CircuitBreaker
    from conduit.infrastructure.resilience.resilient_caller import ResilientCaller
    from conduit.infrastructure.resilience.retry_policy import RetryPolicy

    settings = get_settings()
    return ResilientCaller(
        name=name,
        policy=RetryPolicy.from_settings(settings),
        breaker=CircuitBreaker(
            name=name,
            failure_threshold=settings.circuit_breaker_failure_threshold,
            reset_timeout=settings.circuit_breaker_reset_timeout_seconds,
        ),
        logger=get_logger(),
    )


@lru_cache()
def get_inventory_gateway() -> "InventoryGatewayProtocol":
    """Get the HTTP inventory gateway singleton."""
    from conduit.infrastructure.external.inventory_client import HttpInventoryGateway

    settings = get_settings()
    return HttpInventoryGateway(
        base_url=settings.inventory_service_url,
        caller=get_resilient_caller("inventory"),
        logger=get_logger(),
        timeout=settings.inventory_timeout_seconds,
    )
