"""Single-process event bus.

Subscribers are keyed by exact event class. ``publish`` runs all of an
event's subscribers concurrently and waits for them; one that raises is
logged with the event's correlation id and does not affect the others or
the publisher.

    bus = InMemoryEventBus(logger=logger)
    bus.subscribe(OrderPlaced, notify_warehouse)
    await bus.publish(event)
"""

import asyncio
from collections import defaultdict

from conduit.domain.events.base_event import DomainEvent
from conduit.domain.protocols.event_bus_protocol import EventHandler
from conduit.domain.protocols.logger_protocol import LoggerProtocol


class InMemoryEventBus:
    """Fail-open notifier for one event loop (not thread-safe)."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._subscribers: defaultdict[type[DomainEvent], list[EventHandler]] = (
            defaultdict(list)
        )
        self._logger = logger

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Add a subscriber. Subscribing twice means being called twice."""
        self._subscribers[event_type].append(handler)

    def handler_count(self, event_type: type[DomainEvent]) -> int:
        return len(self._subscribers.get(event_type, ()))

    async def publish(self, event: DomainEvent) -> None:
        subscribers = tuple(self._subscribers.get(type(event), ()))
        if not subscribers:
            return

        self._logger.debug(
            "event_publishing",
            event_type=event.event_type,
            event_id=str(event.event_id),
            subscriber_count=len(subscribers),
        )
        outcomes = await asyncio.gather(
            *(subscriber(event) for subscriber in subscribers),
            return_exceptions=True,
        )
        for subscriber, outcome in zip(subscribers, outcomes, strict=True):
            if isinstance(outcome, Exception):
                self._logger.warning(
                    "event_handler_failed",
                    event_type=event.event_type,
                    event_id=str(event.event_id),
                    correlation_id=event.correlation_id,
                    handler_name=getattr(subscriber, "__qualname__", repr(subscriber)),
                    error_type=type(outcome).__name__,
                    error_message=str(outcome),
                )
            elif isinstance(outcome, BaseException):
                # Cancellation of the publisher
                raise outcome
