"""Retry backoff strategies.

Strategies:
- CONSTANT: Same delay before every retry
- LINEAR: Delay grows by base delay per attempt
- EXPONENTIAL: Delay doubles per attempt
"""

from enum import Enum


class BackoffStrategy(str, Enum):
    """Backoff policy between retries of an outbound call."""

    CONSTANT = "constant"
    LINEAR = "linear"
    EXPONENTIAL = "exponential"
