"""Pipeline stages.

Fixed order, outermost first:

1. CorrelationMiddleware - publishes the context, stamps the correlation
   id on every error leaving the pipeline
2. LoggingMiddleware - request_started / request_succeeded / request_failed
3. DeadlineMiddleware - deadline and cancellation signal
4. ExceptionTranslationMiddleware - unexpected faults -> UnexpectedError
5. ValidationMiddleware - short-circuits invalid requests

Logging sits outside the deadline and translation stages so it records
the outcome the caller actually receives.
"""

import asyncio
import time
from typing import Any

from conduit.application.pipeline.context import CorrelationContext, use_context
from conduit.application.pipeline.middleware import NextStage
from conduit.application.pipeline.validator import RequestValidator
from conduit.core.constants import UNEXPECTED_ERROR_MESSAGE
from conduit.core.enums import ErrorCode, ErrorKind
from conduit.core.errors import DomainError, UnexpectedError, ValidationError
from conduit.core.result import Failure, Result, Success
from conduit.domain.protocols import LoggerProtocol


class CorrelationMiddleware:
    """Attach the correlation context for the duration of the request."""

    name = "correlation"

    async def __call__(
        self,
        request: Any,
        context: CorrelationContext,
        call_next: NextStage,
    ) -> Result[Any, Any]:
        with use_context(context):
            result = await call_next(request, context)
        if isinstance(result, Failure) and isinstance(result.error, DomainError):
            return Failure(error=result.error.with_correlation(context.correlation_id))
        return result


class LoggingMiddleware:
    """Log request start and final outcome with duration.

    Expected failures (validation, not found, conflict, dependency) log at
    WARNING; unexpected errors log at ERROR.
    """

    name = "logging"

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def __call__(
        self,
        request: Any,
        context: CorrelationContext,
        call_next: NextStage,
    ) -> Result[Any, Any]:
        log_context = {
            "correlation_id": context.correlation_id,
            "request_type": context.request_type,
            "request_kind": context.request_kind.value,
        }
        self._logger.info("request_started", **log_context)
        started = time.perf_counter()
        try:
            result = await call_next(request, context)
        except asyncio.CancelledError:
            self._logger.warning(
                "request_abandoned",
                duration_ms=_elapsed_ms(started),
                **log_context,
            )
            raise

        duration_ms = _elapsed_ms(started)
        match result:
            case Success():
                self._logger.info(
                    "request_succeeded", duration_ms=duration_ms, **log_context
                )
            case Failure(error=error):
                log = (
                    self._logger.error
                    if error.kind == ErrorKind.UNEXPECTED
                    else self._logger.warning
                )
                log(
                    "request_failed",
                    error_kind=error.kind.value,
                    error_code=error.code.value,
                    error_message=error.message,
                    duration_ms=duration_ms,
                    **log_context,
                )
        return result


class DeadlineMiddleware:
    """Enforce the request deadline and caller cancellation signal.

    The rest of the chain runs as a separate task. When the deadline
    passes or the cancel event is set first, that task is cancelled (the
    dispatcher rolls its unit of work back on cancellation) and awaited for
    at most ``grace_seconds``; the request then ends with
    DependencyError(REQUEST_TIMEOUT | REQUEST_CANCELLED). The pipeline
    never blocks past deadline + grace.

    If the caller's own task is cancelled, the inner task is cancelled too
    and the cancellation propagates.
    """

    name = "deadline"

    def __init__(self, *, grace_seconds: float, logger: LoggerProtocol) -> None:
        self._grace_seconds = grace_seconds
        self._logger = logger
        self._stragglers: set[asyncio.Future[Any]] = set()

    async def __call__(
        self,
        request: Any,
        context: CorrelationContext,
        call_next: NextStage,
    ) -> Result[Any, Any]:
        if context.deadline is None and context.cancel_event is None:
            return await call_next(request, context)
        if context.should_abort():
            return Failure(error=context.abort_error())

        work = asyncio.ensure_future(call_next(request, context))
        waiters: set[asyncio.Future[Any]] = {work}
        cancel_waiter: asyncio.Future[Any] | None = None
        if context.cancel_event is not None:
            cancel_waiter = asyncio.ensure_future(context.cancel_event.wait())
            waiters.add(cancel_waiter)

        try:
            await asyncio.wait(
                waiters,
                timeout=context.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            await self._stop(work, context)
            raise
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()

        if work.done():
            return work.result()

        await self._stop(work, context)
        error = context.abort_error()
        self._logger.warning(
            "request_aborted",
            correlation_id=context.correlation_id,
            request_type=context.request_type,
            reason=error.code.value,
        )
        return Failure(error=error)

    async def _stop(self, work: asyncio.Future[Any], context: CorrelationContext) -> None:
        """Cancel the inner task and wait (bounded) for its rollback."""
        work.cancel()
        done, _ = await asyncio.wait({work}, timeout=self._grace_seconds)
        if work in done:
            if not work.cancelled() and work.exception() is not None:
                self._logger.warning(
                    "request_abort_raised",
                    correlation_id=context.correlation_id,
                    error_type=type(work.exception()).__name__,
                )
            return
        self._logger.warning(
            "request_abort_grace_exceeded",
            correlation_id=context.correlation_id,
            request_type=context.request_type,
            grace_seconds=self._grace_seconds,
        )
        self._stragglers.add(work)
        work.add_done_callback(self._stragglers.discard)


class ExceptionTranslationMiddleware:
    """Convert any unexpected fault from below into UnexpectedError.

    The fault is logged once with traceback and correlation id; the caller
    only sees a generic message.
    """

    name = "exception_translation"

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def __call__(
        self,
        request: Any,
        context: CorrelationContext,
        call_next: NextStage,
    ) -> Result[Any, Any]:
        try:
            return await call_next(request, context)
        except Exception as e:
            self._logger.error(
                "unexpected_error",
                error=e,
                correlation_id=context.correlation_id,
                request_type=context.request_type,
                exc_info=True,
            )
            return Failure(
                error=UnexpectedError(
                    code=ErrorCode.UNEXPECTED_ERROR,
                    message=UNEXPECTED_ERROR_MESSAGE,
                    correlation_id=context.correlation_id,
                )
            )


class ValidationMiddleware:
    """Reject invalid requests before dispatch."""

    name = "validation"

    def __init__(self, validator: RequestValidator) -> None:
        self._validator = validator

    async def __call__(
        self,
        request: Any,
        context: CorrelationContext,
        call_next: NextStage,
    ) -> Result[Any, Any]:
        failures = self._validator.validate(request)
        if failures:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message=f"Request failed {len(failures)} validation rule(s)",
                    failures=tuple(failures),
                )
            )
        return await call_next(request, context)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
