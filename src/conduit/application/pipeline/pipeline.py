"""Request pipeline - the single entry point for every request.

Composes the fixed stage order around the dispatcher once, at
construction, and runs each request through it with a fresh correlation
context.

Usage:
    pipeline = get_pipeline()
    result = await pipeline.send(CreateOrder(...), timeout=5.0)
"""

import asyncio
from typing import Any

from conduit.application.cqrs.handler_registry import HandlerRegistry
from conduit.application.pipeline.context import CorrelationContext
from conduit.application.pipeline.dispatcher import Dispatcher
from conduit.application.pipeline.middleware import Middleware, compose
from conduit.application.pipeline.stages import (
    CorrelationMiddleware,
    DeadlineMiddleware,
    ExceptionTranslationMiddleware,
    LoggingMiddleware,
    ValidationMiddleware,
)
from conduit.application.pipeline.validator import RequestValidator
from conduit.core.errors import UnregisteredRequestError
from conduit.core.result import Result
from conduit.domain.protocols import LoggerProtocol


class RequestPipeline:
    """Ordered middleware chain around the dispatcher.

    Stage order is fixed and identical for every request:
    correlation -> logging -> deadline -> exception_translation ->
    validation -> dispatch.
    """

    def __init__(
        self,
        *,
        registry: HandlerRegistry,
        dispatcher: Dispatcher,
        logger: LoggerProtocol,
        request_timeout: float,
        cancellation_grace: float,
    ) -> None:
        """Build the chain.

        Args:
            registry: Handler registry (also supplies declared rules).
            dispatcher: Terminal stage.
            logger: Structured logger for the logging/deadline/translation stages.
            request_timeout: Default deadline in seconds for send().
            cancellation_grace: Seconds an aborted request may spend rolling back.
        """
        self._registry = registry
        self._request_timeout = request_timeout
        self._stages: tuple[Middleware, ...] = (
            CorrelationMiddleware(),
            LoggingMiddleware(logger),
            DeadlineMiddleware(grace_seconds=cancellation_grace, logger=logger),
            ExceptionTranslationMiddleware(logger),
            ValidationMiddleware(RequestValidator(registry)),
        )
        self._chain = compose(self._stages, dispatcher.dispatch)

    @property
    def stages(self) -> tuple[str, ...]:
        """Stage names, outermost first (dispatch is always last)."""
        return (*(stage.name for stage in self._stages), "dispatch")

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    async def send(
        self,
        request: Any,
        *,
        timeout: float | None = None,
        cancel_event: asyncio.Event | None = None,
        correlation_id: str | None = None,
    ) -> Result[Any, Any]:
        """Run one request through the pipeline.

        Args:
            request: Command or query instance.
            timeout: Deadline in seconds (defaults to the configured timeout).
            cancel_event: Optional caller-owned cancellation signal.
            correlation_id: Caller-supplied correlation id (generated if omitted).

        Returns:
            Success or Failure; faults never escape (caller cancellation
            excepted).

        Raises:
            UnregisteredRequestError: If the request type has no handler. This
                is a wiring error: every type the application constructs is
                registered at startup.
        """
        if type(request) not in self._registry:
            raise UnregisteredRequestError(type(request).__name__)
        context = CorrelationContext.for_request(
            request,
            correlation_id=correlation_id,
            timeout=self._request_timeout if timeout is None else timeout,
            cancel_event=cancel_event,
        )
        return await self._chain(request, context)
