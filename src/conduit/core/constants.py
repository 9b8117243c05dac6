"""Centralized constants for internal implementation details.

These are NOT environment-specific configuration. Anything an operator may
want to tune lives in `conduit/core/config.py` instead; the values below are
defaults and fixed limits.

Example:
    >>> from conduit.core.constants import UNEXPECTED_ERROR_MESSAGE
"""

from decimal import Decimal

# =============================================================================
# Pipeline Defaults
# =============================================================================

REQUEST_TIMEOUT_DEFAULT: float = 30.0
"""Default deadline for one pipeline invocation in seconds."""

CANCELLATION_GRACE_DEFAULT: float = 1.0
"""Default time to wait for cancelled handler work to roll back, in seconds."""

UNEXPECTED_ERROR_MESSAGE: str = "An unexpected error occurred"
"""Generic message surfaced for translated faults (details are only logged)."""


# =============================================================================
# Resilience Defaults
# =============================================================================

RETRY_COUNT_DEFAULT: int = 3
"""Default number of retries after the first attempt."""

RETRY_BASE_DELAY_MS_DEFAULT: int = 200
"""Default base delay between retries in milliseconds."""

RETRY_MAX_DELAY_MS_DEFAULT: int = 5_000
"""Default upper bound for a single retry delay in milliseconds."""

CIRCUIT_FAILURE_THRESHOLD_DEFAULT: int = 5
"""Default consecutive failures before a circuit opens."""

CIRCUIT_RESET_TIMEOUT_DEFAULT: float = 30.0
"""Default seconds an open circuit waits before allowing a trial call."""

EXTERNAL_TIMEOUT_DEFAULT: float = 5.0
"""Default timeout for a single outbound HTTP call in seconds."""


# =============================================================================
# Order Limits
# =============================================================================

MAX_ORDER_TOTAL: Decimal = Decimal("100000.00")
"""Largest allowed order total (quantity x unit price)."""

MAX_PAGE_LIMIT: int = 200
"""Largest page size accepted by list queries."""

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Truncation limit for external response bodies in logs."""
