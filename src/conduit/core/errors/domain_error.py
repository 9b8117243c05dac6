"""Base domain error class for Railway-Oriented Programming.

DomainError is the base class for every error a request can end with.
It does NOT inherit from Exception: errors are returned inside a Failure,
never raised.

Architecture:
- Each subclass pins one ErrorKind (class-level, not a field)
- code refines the kind (ErrorCode enum)
- correlation_id is stamped by the pipeline when the error leaves it

Usage:
    @dataclass(frozen=True, slots=True, kw_only=True)
    class MyError(DomainError):
        kind: ClassVar[ErrorKind] = ErrorKind.CONFLICT
"""

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Self

from conduit.core.enums import ErrorCode, ErrorKind


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        kind: Error kind taxonomy entry (class-level).
        code: Machine-readable error code (enum).
        message: Human-readable error message.
        correlation_id: Correlation ID of the request that produced the error.
        details: Optional context for debugging.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.UNEXPECTED

    code: ErrorCode
    message: str
    correlation_id: str | None = None
    details: dict[str, Any] | None = None

    def with_correlation(self, correlation_id: str) -> Self:
        """Return a copy carrying correlation_id (existing IDs are kept).

        Args:
            correlation_id: Correlation ID of the current request.

        Returns:
            The same error if it already carries an ID, otherwise a copy.
        """
        if self.correlation_id is not None:
            return self
        return replace(self, correlation_id=correlation_id)

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
