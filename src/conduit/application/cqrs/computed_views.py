"""CQRS Registry Computed Views and Helper Functions.

Utility functions for introspecting the CQRS catalog. Used by the
handler registry build, the gateway, and compliance tests.

Helpers default to the application catalog (COMMAND_REGISTRY /
QUERY_REGISTRY); ``validate_registry_consistency`` takes the lists to check
so alternative catalogs (tests, plugins) can be validated the same way.
"""

import inspect
from collections import Counter
from collections.abc import Sequence

from conduit.application.cqrs.metadata import (
    CommandMetadata,
    CQRSCategory,
    QueryMetadata,
    RequestMetadata,
)
from conduit.application.requests import Command, Query


def get_all_commands() -> list[type]:
    """Get all registered command classes."""
    from conduit.application.cqrs.registry import COMMAND_REGISTRY

    return [meta.command_class for meta in COMMAND_REGISTRY]


def get_all_queries() -> list[type]:
    """Get all registered query classes."""
    from conduit.application.cqrs.registry import QUERY_REGISTRY

    return [meta.query_class for meta in QUERY_REGISTRY]


def get_commands_by_category(category: CQRSCategory) -> list[CommandMetadata]:
    from conduit.application.cqrs.registry import COMMAND_REGISTRY

    return [meta for meta in COMMAND_REGISTRY if meta.category == category]


def get_queries_by_category(category: CQRSCategory) -> list[QueryMetadata]:
    from conduit.application.cqrs.registry import QUERY_REGISTRY

    return [meta for meta in QUERY_REGISTRY if meta.category == category]


def get_command_metadata(command_class: type) -> CommandMetadata | None:
    """Get metadata for a specific command.

    Args:
        command_class: The command class to look up.

    Returns:
        CommandMetadata if found, None otherwise.
    """
    from conduit.application.cqrs.registry import COMMAND_REGISTRY

    for meta in COMMAND_REGISTRY:
        if meta.command_class is command_class:
            return meta
    return None


def get_query_metadata(query_class: type) -> QueryMetadata | None:
    """Get metadata for a specific query.

    Args:
        query_class: The query class to look up.

    Returns:
        QueryMetadata if found, None otherwise.
    """
    from conduit.application.cqrs.registry import QUERY_REGISTRY

    for meta in QUERY_REGISTRY:
        if meta.query_class is query_class:
            return meta
    return None


def get_metadata_for(request_class: type) -> RequestMetadata | None:
    """Get command or query metadata for a request class."""
    return get_command_metadata(request_class) or get_query_metadata(request_class)


def get_commands_emitting_events() -> list[CommandMetadata]:
    from conduit.application.cqrs.registry import COMMAND_REGISTRY

    return [meta for meta in COMMAND_REGISTRY if meta.emits_events]


def get_paginated_queries() -> list[QueryMetadata]:
    from conduit.application.cqrs.registry import QUERY_REGISTRY

    return [meta for meta in QUERY_REGISTRY if meta.is_paginated]


def get_statistics() -> dict[str, int | dict[str, int]]:
    """Get catalog statistics for documentation and monitoring.

    Returns:
        Dict with counts by category, type, etc.

    Example:
        >>> stats = get_statistics()
        >>> stats["total_commands"]
        2
    """
    from conduit.application.cqrs.registry import COMMAND_REGISTRY, QUERY_REGISTRY

    return {
        "total_commands": len(COMMAND_REGISTRY),
        "total_queries": len(QUERY_REGISTRY),
        "total_operations": len(COMMAND_REGISTRY) + len(QUERY_REGISTRY),
        "commands_by_category": dict(
            Counter(meta.category.value for meta in COMMAND_REGISTRY)
        ),
        "queries_by_category": dict(
            Counter(meta.category.value for meta in QUERY_REGISTRY)
        ),
        "commands_emitting_events": sum(
            1 for meta in COMMAND_REGISTRY if meta.emits_events
        ),
        "commands_with_rules": sum(1 for meta in COMMAND_REGISTRY if meta.rules),
        "paginated_queries": sum(1 for meta in QUERY_REGISTRY if meta.is_paginated),
    }


def get_all_handler_classes() -> list[type]:
    """Get all registered handler classes (commands + queries), deduplicated."""
    from conduit.application.cqrs.registry import COMMAND_REGISTRY, QUERY_REGISTRY

    handlers: dict[type, None] = {}
    for cmd_meta in COMMAND_REGISTRY:
        handlers[cmd_meta.handler_class] = None
    for qry_meta in QUERY_REGISTRY:
        handlers[qry_meta.handler_class] = None
    return list(handlers)


def validate_registry_consistency(
    commands: Sequence[CommandMetadata] | None = None,
    queries: Sequence[QueryMetadata] | None = None,
) -> list[str]:
    """Validate a catalog for configuration errors.

    Checks:
        - No request class registered twice (exactly one handler per type)
        - No two request classes share a type name
        - Commands subclass Command, queries subclass Query
        - Every handler class defines an async handle() method
        - Every declared rule is callable

    Args:
        commands: Command entries (defaults to COMMAND_REGISTRY).
        queries: Query entries (defaults to QUERY_REGISTRY).

    Returns:
        List of error messages. Empty if the catalog is consistent.
    """
    if commands is None or queries is None:
        from conduit.application.cqrs.registry import COMMAND_REGISTRY, QUERY_REGISTRY

        commands = COMMAND_REGISTRY if commands is None else commands
        queries = QUERY_REGISTRY if queries is None else queries

    errors: list[str] = []
    entries: list[RequestMetadata] = [*commands, *queries]

    class_counts = Counter(meta.request_class for meta in entries)
    for request_class, count in class_counts.items():
        if count > 1:
            errors.append(
                f"Request {request_class.__name__} registered {count} times "
                f"(exactly one handler allowed)"
            )

    name_owners: dict[str, set[type]] = {}
    for meta in entries:
        name_owners.setdefault(meta.request_class.__name__, set()).add(
            meta.request_class
        )
    for name, owners in name_owners.items():
        if len(owners) > 1:
            errors.append(f"Request type name {name} is used by {len(owners)} classes")

    for cmd_meta in commands:
        if not _is_subclass(cmd_meta.command_class, Command):
            errors.append(f"{cmd_meta.command_class.__name__} is not a Command")
    for qry_meta in queries:
        if not _is_subclass(qry_meta.query_class, Query):
            errors.append(f"{qry_meta.query_class.__name__} is not a Query")

    for meta in entries:
        handle = getattr(meta.handler_class, "handle", None)
        if handle is None:
            errors.append(
                f"Handler {meta.handler_class.__name__} missing handle() method"
            )
        elif not inspect.iscoroutinefunction(handle):
            errors.append(
                f"Handler {meta.handler_class.__name__}.handle() must be async"
            )
        for rule in meta.rules:
            if not callable(rule):
                errors.append(
                    f"Rule {rule!r} of {meta.request_class.__name__} is not callable"
                )

    return errors


def _is_subclass(candidate: type, base: type) -> bool:
    return isinstance(candidate, type) and issubclass(candidate, base)
