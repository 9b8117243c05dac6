"""Structured logger port.

Every pipeline stage, handler and adapter logs through this protocol and
never imports structlog directly. Messages are snake_case event names;
everything else goes into keyword context:

    logger.warning("commit_failed", request_type="CreateOrder", error_message=...)

Level conventions used by the pipeline:
    - INFO: request_started, request_succeeded, committed order events
    - WARNING: expected failures (validation, not found, conflict,
      dependency), retries, aborted requests
    - ERROR: faults translated into UnexpectedError, failed event publishing

Log lines written while a request runs pick up its correlation_id from the
active CorrelationContext; callers do not need to pass it.
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Structured logger."""

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None: ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error.

        Args:
            message: Event name.
            error: Exception whose type and message are added to the line.
            **context: Structured context; ``exc_info=True`` adds the traceback.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None: ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a logger that adds ``context`` to every line (self unchanged)."""
        ...

    def with_context(self, **context: Any) -> LoggerProtocol: ...
