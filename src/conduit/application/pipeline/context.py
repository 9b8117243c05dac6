"""Correlation context for one request.

A CorrelationContext is created at pipeline entry, threaded unchanged
through every stage and into the handler, and discarded when the
pipeline returns. It also carries the request's deadline and cancellation
signal so handlers and the dispatcher can abort cooperatively.

The active context is published in a ContextVar so code outside the call
chain (event handlers, adapters) can reach the correlation id:

    from conduit.application.pipeline.context import get_correlation_id

    logger.info("inventory_checked", correlation_id=get_correlation_id())
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import UTC, datetime

from uuid_extensions import uuid7

from conduit.application.requests import Request, RequestKind
from conduit.core.enums import ErrorCode
from conduit.core.errors import DependencyError

correlation_context: ContextVar[CorrelationContext | None] = ContextVar(
    "correlation_context", default=None
)


def new_correlation_id() -> str:
    """Generate a correlation id (UUIDv7, time-ordered)."""
    return str(uuid7())


@dataclass(frozen=True, kw_only=True, slots=True)
class CorrelationContext:
    """Per-request orchestration context.

    Attributes:
        correlation_id: Identifier attached to every log line and error of
            the request.
        request_type: Request type identifier (class name).
        request_kind: COMMAND or QUERY.
        started_at: When the request entered the pipeline (UTC).
        deadline: Absolute event-loop time after which the request must
            stop, or None for no deadline.
        cancel_event: Caller-owned cancellation signal, or None.
    """

    correlation_id: str
    request_type: str
    request_kind: RequestKind
    started_at: datetime
    deadline: float | None = None
    cancel_event: asyncio.Event | None = None

    @classmethod
    def for_request(
        cls,
        request: Request,
        *,
        correlation_id: str | None = None,
        timeout: float | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> CorrelationContext:
        """Create the context for a request entering the pipeline.

        Must be called inside a running event loop (the deadline is
        expressed in loop time).

        Args:
            request: Request entering the pipeline.
            correlation_id: Caller-supplied id; generated when omitted.
            timeout: Seconds the request may run, or None for no deadline.
            cancel_event: Optional caller-owned cancellation signal.
        """
        deadline = None
        if timeout is not None:
            deadline = asyncio.get_running_loop().time() + timeout
        return cls(
            correlation_id=correlation_id or new_correlation_id(),
            request_type=request.request_type(),
            request_kind=request.kind,
            started_at=datetime.now(UTC),
            deadline=deadline,
            cancel_event=cancel_event,
        )

    def remaining(self) -> float | None:
        """Seconds left before the deadline (never negative), or None."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - asyncio.get_running_loop().time())

    def is_expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def is_cancel_requested(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def should_abort(self) -> bool:
        """True once the deadline passed or cancellation was signalled."""
        return self.is_cancel_requested() or self.is_expired()

    def abort_error(self) -> DependencyError:
        """Error returned when the request is aborted.

        Cancellation takes precedence over expiry when both apply.
        """
        if self.is_cancel_requested():
            return DependencyError(
                code=ErrorCode.REQUEST_CANCELLED,
                message="Request was cancelled before completion",
                dependency="pipeline",
                correlation_id=self.correlation_id,
            )
        return DependencyError(
            code=ErrorCode.REQUEST_TIMEOUT,
            message="Request exceeded its deadline",
            dependency="pipeline",
            correlation_id=self.correlation_id,
        )


def get_current_context() -> CorrelationContext | None:
    """Return the active request context, or None outside a request."""
    return correlation_context.get()


def get_correlation_id() -> str | None:
    """Return the active correlation id, or None outside a request."""
    context = correlation_context.get()
    return context.correlation_id if context else None


@contextmanager
def use_context(context: CorrelationContext) -> Iterator[CorrelationContext]:
    """Publish context as the active request context for the block."""
    token = correlation_context.set(context)
    try:
        yield context
    finally:
        correlation_context.reset(token)
