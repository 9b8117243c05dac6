"""Base domain event class.

Domain events represent "things that happened" and are named in past
tense (OrderPlaced, OrderCancelled). Handlers record them on the unit of
work; they are published only after the unit commits.

Usage:
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    >>> class OrderPlaced(DomainEvent):
    ...     order_id: UUID
    >>>
    >>> event = OrderPlaced(order_id=uuid7())
    >>> event.event_id      # Auto-generated UUIDv7
    >>> event.occurred_at   # Auto-generated UTC timestamp
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7


@dataclass(frozen=True, kw_only=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    All domain events MUST:
        1. Inherit from this base class
        2. Use past tense naming (OrderPlaced, NOT PlaceOrder)
        3. Be frozen dataclasses with kw_only=True

    Attributes:
        event_id: Unique identifier for this event instance.
        occurred_at: When the event occurred (UTC).
        correlation_id: Correlation id of the request that raised it, when
            known. Lets event handlers log under the originating request.
    """

    event_id: UUID = field(default_factory=uuid7)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    correlation_id: str | None = None

    @property
    def event_type(self) -> str:
        """Event class name, used as the routing and logging key."""
        return type(self).__name__
