"""Resilient caller - retry and circuit breaker around outbound calls.

Implements ResilientCallerProtocol. An operation signals failure by
raising ExternalCallError; the caller decides whether to retry:

- retryable errors are retried up to the policy's max_retries, sleeping
  per the backoff strategy (or the remote's Retry-After)
- non-retryable errors fail immediately
- while the circuit is open no attempt is made
  (EXTERNAL_SERVICE_UNAVAILABLE)

The outcome is a Result; ExternalCallError never leaves this class.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from conduit.core.enums import ErrorCode
from conduit.core.errors import DependencyError, ExternalCallError
from conduit.core.result import Failure, Result, Success
from conduit.domain.protocols.logger_protocol import LoggerProtocol
from conduit.infrastructure.resilience.circuit_breaker import CircuitBreaker
from conduit.infrastructure.resilience.retry_policy import RetryPolicy

T = TypeVar("T")


class ResilientCaller:
    """Apply retry policy and circuit breaker to calls of one dependency.

    Args:
        name: Dependency name (e.g. "inventory").
        policy: Retry policy.
        breaker: Circuit breaker guarding the dependency.
        logger: Structured logger.
        sleep: Async sleep (injectable for tests).
    """

    def __init__(
        self,
        *,
        name: str,
        policy: RetryPolicy,
        breaker: CircuitBreaker,
        logger: LoggerProtocol,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.name = name
        self._policy = policy
        self._breaker = breaker
        self._logger = logger
        self._sleep = sleep

    @property
    def breaker(self) -> CircuitBreaker:
        return self._breaker

    async def call(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        operation_name: str,
    ) -> Result[T, DependencyError]:
        """Invoke operation with retries and circuit breaking.

        Args:
            operation: Zero-argument coroutine factory, called once per attempt.
            operation_name: Name used in logs and error details.

        Returns:
            Success(value) or Failure(DependencyError).
        """
        attempts = 0
        retry = 0
        while True:
            if not self._breaker.allow_request():
                self._logger.warning(
                    "external_call_rejected",
                    dependency=self.name,
                    operation=operation_name,
                    circuit_state=self._breaker.state.value,
                    retry_after_seconds=round(self._breaker.retry_after(), 3),
                )
                return Failure(
                    error=DependencyError(
                        code=ErrorCode.EXTERNAL_SERVICE_UNAVAILABLE,
                        message=f"{self.name} service is temporarily unavailable",
                        dependency=self.name,
                        details={"operation": operation_name, "attempts": attempts},
                    )
                )

            attempts += 1
            try:
                value = await operation()
            except ExternalCallError as e:
                self._breaker.record_failure()
                if not e.retryable or retry == self._policy.max_retries:
                    return self._give_up(e, operation_name, attempts)
                delay_ms = self._delay_ms(retry, e)
                self._logger.warning(
                    "external_call_retry",
                    dependency=self.name,
                    operation=operation_name,
                    attempt=attempts,
                    delay_ms=delay_ms,
                    error_message=str(e),
                )
                await self._sleep(delay_ms / 1000)
                retry += 1
                continue
            except asyncio.CancelledError:
                self._breaker.release_trial()
                raise
            except Exception:
                self._breaker.record_failure()
                raise

            self._breaker.record_success()
            return Success(value=value)

    def _give_up(
        self, error: ExternalCallError, operation_name: str, attempts: int
    ) -> Failure[DependencyError]:
        self._logger.warning(
            "external_call_failed",
            dependency=self.name,
            operation=operation_name,
            attempts=attempts,
            retryable=error.retryable,
            is_timeout=error.is_timeout,
            error_message=str(error),
        )
        return Failure(error=self._to_error(error, operation_name, attempts))

    def _delay_ms(self, retry: int, error: ExternalCallError) -> int:
        if error.retry_after_ms is not None:
            return min(error.retry_after_ms, self._policy.max_delay_ms)
        return self._policy.delay_ms(retry)

    def _to_error(
        self, error: ExternalCallError, operation_name: str, attempts: int
    ) -> DependencyError:
        if error.is_timeout:
            return DependencyError(
                code=ErrorCode.EXTERNAL_SERVICE_TIMEOUT,
                message=f"{self.name} service timed out",
                dependency=self.name,
                details={"operation": operation_name, "attempts": attempts},
            )
        return DependencyError(
            code=ErrorCode.EXTERNAL_SERVICE_FAILED,
            message=f"{self.name} service call failed",
            dependency=self.name,
            details={
                "operation": operation_name,
                "attempts": attempts,
                "reason": str(error),
            },
        )
