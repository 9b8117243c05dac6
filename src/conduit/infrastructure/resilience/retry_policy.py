"""Retry policy for outbound calls.

Delay before retry ``n`` (0-based) by strategy, capped at max_delay_ms:
- CONSTANT: base
- LINEAR: base * (n + 1)
- EXPONENTIAL: base * 2**n

A +/- jitter fraction is applied to the capped delay so callers that
failed together do not retry in lockstep.
"""

import random
from collections.abc import Callable
from dataclasses import dataclass

from conduit.core.config import Settings
from conduit.core.constants import (
    RETRY_BASE_DELAY_MS_DEFAULT,
    RETRY_COUNT_DEFAULT,
    RETRY_MAX_DELAY_MS_DEFAULT,
)
from conduit.core.enums import BackoffStrategy


@dataclass(frozen=True, kw_only=True, slots=True)
class RetryPolicy:
    """How often and how patiently to retry a failed outbound call.

    Attributes:
        max_retries: Retries after the first attempt (0 disables retrying).
        strategy: Backoff growth between retries.
        base_delay_ms: Base delay in milliseconds.
        max_delay_ms: Upper bound for one delay in milliseconds.
        jitter: Fraction (0-1) of random spread applied to each delay.
    """

    max_retries: int = RETRY_COUNT_DEFAULT
    strategy: BackoffStrategy = BackoffStrategy.EXPONENTIAL
    base_delay_ms: int = RETRY_BASE_DELAY_MS_DEFAULT
    max_delay_ms: int = RETRY_MAX_DELAY_MS_DEFAULT
    jitter: float = 0.25

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.base_delay_ms < 0 or self.max_delay_ms < 0:
            raise ValueError("retry delays must be >= 0")
        if not 0 <= self.jitter <= 1:
            raise ValueError("jitter must be between 0 and 1")

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_retries=settings.retry_count,
            strategy=settings.retry_backoff,
            base_delay_ms=settings.retry_base_delay_ms,
            max_delay_ms=settings.retry_max_delay_ms,
            jitter=settings.retry_jitter,
        )

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def base_delay_for(self, retry: int) -> int:
        """Delay before retry number ``retry`` (0-based), without jitter."""
        match self.strategy:
            case BackoffStrategy.CONSTANT:
                delay = self.base_delay_ms
            case BackoffStrategy.LINEAR:
                delay = self.base_delay_ms * (retry + 1)
            case BackoffStrategy.EXPONENTIAL:
                delay = self.base_delay_ms * (2**retry)
        return min(self.max_delay_ms, delay)

    def delay_ms(
        self,
        retry: int,
        *,
        uniform: Callable[[float, float], float] = random.uniform,
    ) -> int:
        """Delay before retry number ``retry`` with jitter applied.

        Args:
            retry: 0-based retry index.
            uniform: Random source (injectable for tests).
        """
        delay = self.base_delay_for(retry)
        if self.jitter:
            delay = int(delay * uniform(1 - self.jitter, 1 + self.jitter))  # nosec B311
        return max(0, delay)
