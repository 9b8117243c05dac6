"""Handler auto-wiring.

Handlers are built once, when the registry is built, and shared by every
request. Their constructors may only ask for app-scoped services, each
identified by the protocol named in the parameter annotation:

    class CreateOrderHandler:
        def __init__(self, inventory: InventoryGatewayProtocol,
                     logger: LoggerProtocol) -> None: ...

Per-request state (unit of work, correlation context) is passed to
``handle()`` instead.
"""

import inspect
import types
from dataclasses import dataclass
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

from conduit.core.errors import ConfigurationError

T = TypeVar("T")

# Protocol name -> getter in core.container.infrastructure
SERVICE_GETTERS: dict[str, str] = {
    "EventBusProtocol": "get_event_bus",
    "InventoryGatewayProtocol": "get_inventory_gateway",
    "LoggerProtocol": "get_logger",
}


@dataclass(frozen=True, slots=True)
class Dependency:
    """One constructor parameter of a handler."""

    name: str
    type_name: str
    optional: bool


def get_type_name(annotation: Any) -> str:
    """Name of the type an annotation refers to.

    ``X | None`` resolves to ``X``; string forward references resolve to
    their last dotted segment.
    """
    if isinstance(annotation, str):
        return annotation.rsplit(".", 1)[-1].removesuffix(" | None")
    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        return get_type_name(members[0]) if members else "None"
    return getattr(annotation, "__name__", str(annotation))


def analyze_handler_dependencies(handler_class: type) -> dict[str, Dependency]:
    """Constructor parameters of ``handler_class`` by name (empty without __init__)."""
    init = handler_class.__init__
    if init is object.__init__:
        return {}
    try:
        hints = get_type_hints(init)
    except NameError:
        # Unresolvable forward reference; use the raw annotations
        hints = {
            name: param.annotation
            for name, param in inspect.signature(init).parameters.items()
            if param.annotation is not inspect.Parameter.empty
        }
    hints.pop("return", None)
    hints.pop("self", None)
    return {
        name: Dependency(
            name=name,
            type_name=get_type_name(annotation),
            optional=type(None) in get_args(annotation),
        )
        for name, annotation in hints.items()
    }


def _service(type_name: str) -> Any:
    from conduit.core.container import infrastructure

    try:
        getter = SERVICE_GETTERS[type_name]
    except KeyError:
        raise ConfigurationError(f"No service registered for {type_name}") from None
    return getattr(infrastructure, getter)()


def create_handler(handler_class: type[T], **overrides: Any) -> T:
    """Instantiate a handler, injecting each constructor dependency.

    Resolution order per parameter: ``overrides`` by parameter name, then the
    app-scoped service for its protocol, then None for optional parameters.

    Raises:
        ConfigurationError: If a required parameter cannot be resolved.
    """
    kwargs: dict[str, Any] = {}
    for dependency in analyze_handler_dependencies(handler_class).values():
        if dependency.name in overrides:
            kwargs[dependency.name] = overrides[dependency.name]
        elif dependency.type_name in SERVICE_GETTERS:
            kwargs[dependency.name] = _service(dependency.type_name)
        elif dependency.optional:
            kwargs[dependency.name] = None
        else:
            raise ConfigurationError(
                f"{handler_class.__name__}: cannot inject '{dependency.name}' "
                f"of type {dependency.type_name}"
            )
    return handler_class(**kwargs)


def get_supported_dependencies() -> list[str]:
    """Protocol names create_handler can inject."""
    return list(SERVICE_GETTERS)
