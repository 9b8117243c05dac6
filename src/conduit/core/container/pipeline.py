"""Pipeline dependency factories.

Builds the handler registry, dispatcher, request pipeline and gateway from
the CQRS catalog. The registry is built on first use; any configuration
problem fails that first call with a RegistryConfigurationError listing
all of them.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from conduit.core.config import get_settings
from conduit.core.container.handler_factory import create_handler
from conduit.core.container.infrastructure import (
    get_event_bus,
    get_logger,
    get_unit_of_work_factory,
)

if TYPE_CHECKING:
    from conduit.application.cqrs.handler_registry import HandlerRegistry
    from conduit.application.pipeline.dispatcher import Dispatcher
    from conduit.application.pipeline.pipeline import RequestPipeline
    from conduit.presentation.gateway import RequestGateway


@lru_cache()
def get_handler_registry() -> "HandlerRegistry":
    """Build the read-only handler registry (app-scoped).

    Every catalogued command and query is required to have a handler.

    Raises:
        RegistryConfigurationError: If the catalog or wiring is inconsistent.
    """
    from conduit.application.cqrs import (
        COMMAND_REGISTRY,
        QUERY_REGISTRY,
        HandlerRegistry,
        get_all_commands,
        get_all_queries,
    )

    return HandlerRegistry.build(
        commands=COMMAND_REGISTRY,
        queries=QUERY_REGISTRY,
        handler_factory=create_handler,
        required=[*get_all_commands(), *get_all_queries()],
    )


@lru_cache()
def get_dispatcher() -> "Dispatcher":
    from conduit.application.pipeline.dispatcher import Dispatcher

    return Dispatcher(
        registry=get_handler_registry(),
        uow_factory=get_unit_of_work_factory(),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


@lru_cache()
def get_pipeline() -> "RequestPipeline":
    """Get the request pipeline singleton.

    Timeout and cancellation grace come from settings
    (CONDUIT_REQUEST_TIMEOUT_SECONDS, CONDUIT_CANCELLATION_GRACE_SECONDS).
    """
    from conduit.application.pipeline.pipeline import RequestPipeline

    settings = get_settings()
    return RequestPipeline(
        registry=get_handler_registry(),
        dispatcher=get_dispatcher(),
        logger=get_logger(),
        request_timeout=settings.request_timeout_seconds,
        cancellation_grace=settings.cancellation_grace_seconds,
    )


@lru_cache()
def get_gateway() -> "RequestGateway":
    """Get the payload-level request gateway singleton."""
    from conduit.presentation.gateway import RequestGateway

    return RequestGateway(pipeline=get_pipeline(), logger=get_logger())
