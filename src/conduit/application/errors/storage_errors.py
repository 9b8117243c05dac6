"""Storage failure mapping shared by the order handlers.

The PersistenceError text names tables, constraints and ids; it goes to
the log only. Callers see a generic DependencyError.
"""

from typing import TYPE_CHECKING

from conduit.core.enums import ErrorCode
from conduit.core.errors import DependencyError, PersistenceError
from conduit.domain.protocols import LoggerProtocol

if TYPE_CHECKING:
    from conduit.application.pipeline.context import CorrelationContext


def storage_unavailable(
    error: PersistenceError,
    *,
    logger: LoggerProtocol,
    context: "CorrelationContext",
) -> DependencyError:
    """Log a storage failure and build the caller-facing error."""
    logger.warning(
        "order_storage_failed",
        correlation_id=context.correlation_id,
        request_type=context.request_type,
        error_type=type(error).__name__,
        error_message=str(error),
    )
    return DependencyError(
        code=ErrorCode.PERSISTENCE_FAILED,
        message="Order storage is unavailable",
        dependency="persistence",
    )
