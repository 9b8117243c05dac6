"""Dispatcher - terminal pipeline stage.

Resolves the single handler for a request and runs it inside a fresh
Unit of Work:

- handler returns Success -> commit (unless the request was aborted in
  the meantime, then roll back), then publish the recorded events
- handler returns Failure -> roll back, return the Failure as-is
- handler raises or is cancelled -> roll back, re-raise (the translation
  and deadline stages above decide what the caller sees)

The dispatcher never retries a handler.
"""

from collections.abc import Callable
from typing import Any

from conduit.application.cqrs.handler_registry import HandlerRegistry
from conduit.application.pipeline.context import CorrelationContext
from conduit.application.unit_of_work import UnitOfWork
from conduit.core.enums import ErrorCode
from conduit.core.errors import DependencyError, DomainError, PersistenceError
from conduit.core.result import Failure, Result, is_result
from conduit.domain.events.base_event import DomainEvent
from conduit.domain.protocols import EventBusProtocol, LoggerProtocol

type UnitOfWorkFactory = Callable[[], UnitOfWork]


class Dispatcher:
    """Route a validated request to its handler inside a Unit of Work."""

    def __init__(
        self,
        *,
        registry: HandlerRegistry,
        uow_factory: UnitOfWorkFactory,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize dispatcher.

        Args:
            registry: Read-only handler registry (built at startup).
            uow_factory: Creates a fresh, IDLE unit of work per request.
            event_bus: Notifier for events recorded by handlers.
            logger: Structured logger.
        """
        self._registry = registry
        self._uow_factory = uow_factory
        self._event_bus = event_bus
        self._logger = logger

    async def dispatch(
        self, request: Any, context: CorrelationContext
    ) -> Result[Any, Any]:
        """Run the request's handler inside a Unit of Work.

        Args:
            request: Validated request.
            context: Correlation context of the request.

        Returns:
            The handler's Result, or Failure(DependencyError) when the commit
            fails or the request was aborted before commit.

        Raises:
            TypeError: If the handler returns something other than a Result, or
                a Failure whose error is not a DomainError.
            BaseException: Whatever the handler raised (after rollback).
        """
        registration = self._registry.resolve(type(request))
        uow = self._uow_factory()
        await uow.begin()
        try:
            result = await registration.handler.handle(request, context, uow)
        except BaseException:
            await uow.rollback()
            raise

        if not is_result(result):
            await uow.rollback()
            raise TypeError(
                f"{type(registration.handler).__name__}.handle() returned "
                f"{type(result).__name__}, expected Success or Failure"
            )

        if isinstance(result, Failure) and not isinstance(result.error, DomainError):
            await uow.rollback()
            raise TypeError(
                f"{type(registration.handler).__name__}.handle() returned Failure "
                f"carrying {type(result.error).__name__}, expected a DomainError"
            )

        if isinstance(result, Failure):
            await uow.rollback()
            return result

        if context.should_abort():
            await uow.rollback()
            return Failure(error=context.abort_error())

        try:
            await uow.commit()
        except PersistenceError as e:
            self._logger.warning(
                "commit_failed",
                correlation_id=context.correlation_id,
                request_type=context.request_type,
                error_message=str(e),
            )
            return Failure(
                error=DependencyError(
                    code=ErrorCode.PERSISTENCE_FAILED,
                    message="Changes could not be saved",
                    dependency="persistence",
                )
            )

        await self._publish(uow.collect_events(), context)
        return result

    async def _publish(
        self, events: list[DomainEvent], context: CorrelationContext
    ) -> None:
        """Publish committed events; the bus is fail-open per handler."""
        for event in events:
            try:
                await self._event_bus.publish(event)
            except Exception as e:
                # Changes are already committed; report, do not fail the request
                self._logger.error(
                    "event_publish_failed",
                    error=e,
                    correlation_id=context.correlation_id,
                    event_type=event.event_type,
                )
