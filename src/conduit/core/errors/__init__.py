"""Core errors package.

Two families live here:
- DomainError and its subclasses: errors as data, carried by Failure.
- Fault exceptions: raised below the pipeline boundary only.

Usage:
    from conduit.core.errors import DomainError, ValidationError, NotFoundError
"""

from conduit.core.errors.common_errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
    ValidationFailure,
)
from conduit.core.errors.domain_error import DomainError
from conduit.core.errors.exceptions import (
    ConfigurationError,
    ExternalCallError,
    PersistenceError,
    RegistryConfigurationError,
    UnitOfWorkStateError,
    UnregisteredRequestError,
)

__all__ = [
    # Errors as data
    "DomainError",
    "ValidationError",
    "ValidationFailure",
    "NotFoundError",
    "ConflictError",
    "DependencyError",
    "UnexpectedError",
    # Fault exceptions
    "ConfigurationError",
    "RegistryConfigurationError",
    "UnregisteredRequestError",
    "UnitOfWorkStateError",
    "PersistenceError",
    "ExternalCallError",
]
