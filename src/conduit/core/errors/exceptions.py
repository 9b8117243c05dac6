"""Fault exceptions.

These are raised, not returned. They are used for control flow below the
pipeline boundary (infrastructure adapters, registry build, Unit-of-Work
state machine). Nothing here ever reaches the caller of the pipeline:
adapters' faults are mapped to DependencyError by handlers or the resilient
caller, and anything else is translated into UnexpectedError.
"""


class ConfigurationError(Exception):
    """Startup wiring problem (missing dependency, bad settings)."""


class RegistryConfigurationError(ConfigurationError):
    """Handler registry cannot be built.

    Attributes:
        problems: Every problem found, not just the first.
    """

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class UnregisteredRequestError(LookupError):
    """No handler is registered for a request type."""

    def __init__(self, request_type: str) -> None:
        self.request_type = request_type
        super().__init__(f"No handler registered for {request_type!r}")


class UnitOfWorkStateError(RuntimeError):
    """Invalid Unit-of-Work state transition."""


class PersistenceError(Exception):
    """Persistence collaborator failed (wraps the driver/ORM exception)."""


class ExternalCallError(Exception):
    """Remote operation failed.

    Attributes:
        retryable: Whether retrying could succeed (timeouts, 5xx, 429).
        is_timeout: Whether the failure was a timeout.
        retry_after_ms: Delay the remote asked for (Retry-After), if any.
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool,
        is_timeout: bool = False,
        retry_after_ms: int | None = None,
    ) -> None:
        self.retryable = retryable
        self.is_timeout = is_timeout
        self.retry_after_ms = retry_after_ms
        super().__init__(message)
