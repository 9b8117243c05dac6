"""Immutable request-type to handler registry.

Built once at startup from the CQRS catalog, then only read. Every
configuration problem (duplicate registrations, handlers that cannot be
wired, required request types without a handler) is reported together at
build time as a RegistryConfigurationError; once built, resolution of
every registered type is guaranteed.

The registry is shared by all concurrent requests without locking: its
mappings are MappingProxyType views over dicts nothing else references.

Usage:
    registry = HandlerRegistry.build(
        commands=COMMAND_REGISTRY,
        queries=QUERY_REGISTRY,
        handler_factory=create_handler,
    )
    registration = registry.resolve(CreateOrder)
"""

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Protocol

from conduit.application.cqrs.computed_views import validate_registry_consistency
from conduit.application.cqrs.metadata import (
    CommandMetadata,
    QueryMetadata,
    RequestMetadata,
)
from conduit.core.errors import (
    ConfigurationError,
    RegistryConfigurationError,
    UnregisteredRequestError,
)
from conduit.core.validation import ValidationRule

type HandlerFactory = Callable[[type], Any]


class RequestHandler(Protocol):
    """Handler contract: one async handle() per request type."""

    async def handle(self, request: Any, context: Any, uow: Any) -> Any: ...


@dataclass(frozen=True, slots=True)
class Registration:
    """One registry entry.

    Attributes:
        request_class: Registered request class (registry key).
        handler: The single handler instance for the request type.
        metadata: Catalog entry the registration was built from.
    """

    request_class: type
    handler: RequestHandler
    metadata: RequestMetadata

    @property
    def request_type(self) -> str:
        return self.request_class.__name__

    @property
    def rules(self) -> tuple[ValidationRule, ...]:
        return self.metadata.rules


class HandlerRegistry:
    """Read-only mapping from request type to its single handler."""

    __slots__ = ("_by_class", "_by_name")

    def __init__(self, registrations: Iterable[Registration]) -> None:
        by_class: dict[type, Registration] = {}
        by_name: dict[str, Registration] = {}
        problems: list[str] = []
        for registration in registrations:
            if registration.request_class in by_class:
                problems.append(
                    f"Request {registration.request_type} registered more than once"
                )
                continue
            if registration.request_type in by_name:
                problems.append(
                    f"Request type name {registration.request_type} is ambiguous"
                )
                continue
            by_class[registration.request_class] = registration
            by_name[registration.request_type] = registration
        if problems:
            raise RegistryConfigurationError(problems)
        self._by_class: Mapping[type, Registration] = MappingProxyType(by_class)
        self._by_name: Mapping[str, Registration] = MappingProxyType(by_name)

    @classmethod
    def build(
        cls,
        *,
        commands: Sequence[CommandMetadata],
        queries: Sequence[QueryMetadata],
        handler_factory: HandlerFactory,
        required: Iterable[type] = (),
    ) -> "HandlerRegistry":
        """Build the registry from catalog entries.

        Args:
            commands: Command catalog entries.
            queries: Query catalog entries.
            handler_factory: Creates a handler instance from its class
                (raises ConfigurationError for unknown dependencies).
            required: Request types the application advertises; each must
                have a registration.

        Returns:
            Fully built, read-only registry.

        Raises:
            RegistryConfigurationError: Listing every problem found.
        """
        problems = validate_registry_consistency(commands, queries)
        if problems:
            raise RegistryConfigurationError(problems)

        handlers: dict[type, Any] = {}
        registrations: list[Registration] = []
        for meta in [*commands, *queries]:
            handler_class = meta.handler_class
            if handler_class not in handlers:
                try:
                    handlers[handler_class] = handler_factory(handler_class)
                except ConfigurationError as e:
                    problems.append(f"Cannot create {handler_class.__name__}: {e}")
                    continue
            registrations.append(
                Registration(
                    request_class=meta.request_class,
                    handler=handlers[handler_class],
                    metadata=meta,
                )
            )

        catalogued = {meta.request_class for meta in [*commands, *queries]}
        for request_class in required:
            if request_class not in catalogued:
                problems.append(f"No handler registered for {request_class.__name__}")

        if problems:
            raise RegistryConfigurationError(problems)
        return cls(registrations)

    def resolve(self, request_class: type) -> Registration:
        """Look up the registration for a request class (O(1)).

        Raises:
            UnregisteredRequestError: If the type was never registered.
        """
        try:
            return self._by_class[request_class]
        except KeyError:
            raise UnregisteredRequestError(request_class.__name__) from None

    def resolve_name(self, request_type: str) -> Registration:
        """Look up the registration by request type name.

        Raises:
            UnregisteredRequestError: If no request type has that name.
        """
        try:
            return self._by_name[request_type]
        except KeyError:
            raise UnregisteredRequestError(request_type) from None

    @property
    def request_types(self) -> tuple[str, ...]:
        """Registered request type names, in catalog order."""
        return tuple(self._by_name)

    def __contains__(self, request_class: object) -> bool:
        return request_class in self._by_class

    def __iter__(self) -> Iterator[Registration]:
        return iter(self._by_class.values())

    def __len__(self) -> int:
        return len(self._by_class)
