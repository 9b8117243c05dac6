"""Logging event handler for order events.

Writes one structured line per committed order event. Subscribed to the
event bus by the container.
"""

from conduit.domain.events import OrderCancelled, OrderPlaced
from conduit.domain.protocols.event_bus_protocol import EventBusProtocol
from conduit.domain.protocols.logger_protocol import LoggerProtocol


class LoggingEventHandler:
    """Log order domain events."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    def register(self, event_bus: EventBusProtocol) -> None:
        """Subscribe this handler's methods to the bus."""
        event_bus.subscribe(OrderPlaced, self.handle_order_placed)
        event_bus.subscribe(OrderCancelled, self.handle_order_cancelled)

    async def handle_order_placed(self, event: OrderPlaced) -> None:
        self._logger.info(
            "order_placed",
            event_id=str(event.event_id),
            correlation_id=event.correlation_id,
            order_id=str(event.order_id),
            customer_id=str(event.customer_id),
            sku=event.sku,
            quantity=event.quantity,
            total=str(event.total),
        )

    async def handle_order_cancelled(self, event: OrderCancelled) -> None:
        self._logger.info(
            "order_cancelled",
            event_id=str(event.event_id),
            correlation_id=event.correlation_id,
            order_id=str(event.order_id),
            customer_id=str(event.customer_id),
            reason=event.reason,
        )
