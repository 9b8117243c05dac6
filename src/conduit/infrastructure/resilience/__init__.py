"""Resilience for outbound calls: retry policy, circuit breaker, resilient caller."""

from conduit.infrastructure.resilience.circuit_breaker import CircuitBreaker, CircuitState
from conduit.infrastructure.resilience.resilient_caller import ResilientCaller
from conduit.infrastructure.resilience.retry_policy import RetryPolicy

__all__ = ["CircuitBreaker", "CircuitState", "ResilientCaller", "RetryPolicy"]
