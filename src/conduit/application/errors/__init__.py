"""Application layer errors.

Exports:
    storage_unavailable: DependencyError for a failed order storage call
"""

from conduit.application.errors.storage_errors import storage_unavailable

__all__ = ["storage_unavailable"]
