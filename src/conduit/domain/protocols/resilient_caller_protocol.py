"""Resilient external-call protocol.

Wraps an outbound operation with retry and circuit-breaker behavior and
returns the outcome as a Result instead of raising.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

from conduit.core.errors import DependencyError
from conduit.core.result import Result

T = TypeVar("T")


class ResilientCallerProtocol(Protocol):
    """Protocol for resilience-wrapped outbound calls."""

    async def call(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        operation_name: str,
    ) -> Result[T, DependencyError]:
        """Invoke operation with retry and circuit-breaker behavior applied.

        Args:
            operation: Zero-argument coroutine factory, called once per attempt.
                Raises ExternalCallError to signal failure.
            operation_name: Name used in logs and error messages.

        Returns:
            Success(value) or Failure(DependencyError).
        """
        ...
