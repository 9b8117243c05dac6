"""CQRS catalog and handler registry.

The catalog (COMMAND_REGISTRY / QUERY_REGISTRY) is the single source of
truth for which requests exist, which handler serves each, and which
cross-field rules each declares. HandlerRegistry turns it into the
read-only lookup the dispatcher uses.

Inside the application package import from the submodules directly
(conduit.application.cqrs.metadata, ...): handlers are imported by the
catalog, so the package namespace is only complete once it is.
"""

# Metadata types
from conduit.application.cqrs.metadata import (
    CommandMetadata,
    CQRSCategory,
    QueryMetadata,
    RequestMetadata,
)

# Registry constants
from conduit.application.cqrs.registry import COMMAND_REGISTRY, QUERY_REGISTRY

# Computed views and helper functions
from conduit.application.cqrs.computed_views import (
    get_all_commands,
    get_all_handler_classes,
    get_all_queries,
    get_command_metadata,
    get_commands_by_category,
    get_commands_emitting_events,
    get_metadata_for,
    get_paginated_queries,
    get_queries_by_category,
    get_query_metadata,
    get_statistics,
    validate_registry_consistency,
)

# Handler registry
from conduit.application.cqrs.handler_registry import (
    HandlerFactory,
    HandlerRegistry,
    Registration,
    RequestHandler,
)

__all__ = [
    # Metadata
    "CommandMetadata",
    "CQRSCategory",
    "QueryMetadata",
    "RequestMetadata",
    # Registry
    "COMMAND_REGISTRY",
    "QUERY_REGISTRY",
    # Computed views
    "get_all_commands",
    "get_all_handler_classes",
    "get_all_queries",
    "get_command_metadata",
    "get_commands_by_category",
    "get_commands_emitting_events",
    "get_metadata_for",
    "get_paginated_queries",
    "get_queries_by_category",
    "get_query_metadata",
    "get_statistics",
    "validate_registry_consistency",
    # Handler registry
    "HandlerFactory",
    "HandlerRegistry",
    "Registration",
    "RequestHandler",
]
