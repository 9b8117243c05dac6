"""Result types for railway-oriented request handling.

Every request that crosses the pipeline boundary comes back as a Result:
exactly one of a Success carrying the handler's value or a Failure carrying
a DomainError. Faults never leave the pipeline; they are translated into
Failure values on the way out.

Usage:
    async def handle(self, cmd, context, uow) -> Result[UUID, DomainError]:
        order = await uow.orders.find_by_id(cmd.order_id)
        if order is None:
            return Failure(error=NotFoundError(...))
        return Success(value=order.id)

    match await pipeline.send(command):
        case Success(value=order_id):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeGuard, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: The value produced by the handler (may be None).
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: The error describing the failure.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]


def is_success(result: Any) -> TypeGuard[Success[Any]]:
    """Return True if result is a Success."""
    return isinstance(result, Success)


def is_failure(result: Any) -> TypeGuard[Failure[Any]]:
    """Return True if result is a Failure."""
    return isinstance(result, Failure)


def is_result(value: Any) -> bool:
    """Return True if value is either a Success or a Failure."""
    return isinstance(value, (Success, Failure))
