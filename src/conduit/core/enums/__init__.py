"""Core enums package.

Usage:
    from conduit.core.enums import ErrorCode, ErrorKind, Environment
"""

from conduit.core.enums.backoff_strategy import BackoffStrategy
from conduit.core.enums.environment import Environment
from conduit.core.enums.error_code import ErrorCode
from conduit.core.enums.error_kind import ErrorKind

__all__ = ["BackoffStrategy", "Environment", "ErrorCode", "ErrorKind"]
