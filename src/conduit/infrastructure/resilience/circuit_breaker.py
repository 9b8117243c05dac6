"""Circuit breaker for one outbound dependency.

States:
- CLOSED: calls flow; consecutive failures are counted
- OPEN: calls are rejected until reset_timeout has elapsed
- HALF_OPEN: one trial call is allowed; success closes the circuit,
  failure opens it again

One breaker instance guards one dependency and is shared by all requests
calling it (single event loop, no locking).
"""

import time
from collections.abc import Callable
from enum import Enum


class CircuitState(str, Enum):
    """Circuit breaker states."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreaker:
    """Consecutive-failure circuit breaker.

    Args:
        name: Dependency name (for logs and errors).
        failure_threshold: Consecutive failures that open the circuit.
        reset_timeout: Seconds the circuit stays open before a trial call.
        clock: Monotonic time source (injectable for tests).
    """

    def __init__(
        self,
        *,
        name: str,
        failure_threshold: int,
        reset_timeout: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be >= 1")
        if reset_timeout <= 0:
            raise ValueError("reset_timeout must be > 0")
        self.name = name
        self._failure_threshold = failure_threshold
        self._reset_timeout = reset_timeout
        self._clock = clock
        self._state = CircuitState.CLOSED
        self._failures = 0
        self._opened_at: float | None = None
        self._trial_in_flight = False

    @property
    def state(self) -> CircuitState:
        """Current state (OPEN turns HALF_OPEN once reset_timeout elapsed)."""
        if (
            self._state == CircuitState.OPEN
            and self._opened_at is not None
            and self._clock() - self._opened_at >= self._reset_timeout
        ):
            self._state = CircuitState.HALF_OPEN
            self._trial_in_flight = False
        return self._state

    @property
    def failure_count(self) -> int:
        return self._failures

    def retry_after(self) -> float:
        """Seconds until an open circuit allows a trial call (0 if not open)."""
        if self.state != CircuitState.OPEN or self._opened_at is None:
            return 0.0
        return max(0.0, self._reset_timeout - (self._clock() - self._opened_at))

    def allow_request(self) -> bool:
        """Whether a call may proceed now.

        In HALF_OPEN only one trial call is admitted at a time.
        """
        match self.state:
            case CircuitState.CLOSED:
                return True
            case CircuitState.OPEN:
                return False
            case CircuitState.HALF_OPEN:
                if self._trial_in_flight:
                    return False
                self._trial_in_flight = True
                return True

    def record_success(self) -> None:
        self._state = CircuitState.CLOSED
        self._failures = 0
        self._opened_at = None
        self._trial_in_flight = False

    def record_failure(self) -> None:
        if self.state == CircuitState.HALF_OPEN:
            self._open()
            return
        self._failures += 1
        if self._failures >= self._failure_threshold:
            self._open()

    def release_trial(self) -> None:
        """Give back a half-open trial slot without an outcome (caller cancelled)."""
        self._trial_in_flight = False

    def _open(self) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = self._clock()
        self._trial_in_flight = False
