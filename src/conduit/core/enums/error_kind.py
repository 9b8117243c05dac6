"""Error kind taxonomy.

Every error Result carries exactly one ErrorKind. The kind decides how the
caller should react; the finer-grained ErrorCode says what happened.

Kinds:
- VALIDATION: Rule failures found before dispatch (carries failure list)
- NOT_FOUND: A referenced entity does not exist
- CONFLICT: A business invariant would be violated
- DEPENDENCY: An outbound collaborator failed, timed out or was cancelled
- UNEXPECTED: An unanticipated fault reached the translation stage
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Fixed taxonomy of error kinds."""

    VALIDATION = "validation_error"
    NOT_FOUND = "not_found_error"
    CONFLICT = "conflict_error"
    DEPENDENCY = "dependency_error"
    UNEXPECTED = "unexpected_error"
