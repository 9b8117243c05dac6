"""Request contracts.

A request is an immutable, typed value describing one use case call.
Commands change state; queries only read it. Concrete requests subclass
Command or Query and are declared as frozen keyword-only dataclasses with
Annotated field types:

    @dataclass(frozen=True, kw_only=True)
    class CreateOrder(Command):
        customer_id: UUID
        quantity: Quantity

The request class is the registry key; its class name is the request type
identifier used in logs and by the inbound gateway.
"""

from enum import Enum
from typing import ClassVar


class RequestKind(str, Enum):
    """Tag distinguishing state-changing from read-only requests."""

    COMMAND = "command"
    QUERY = "query"


class Request:
    """Base marker for every request."""

    kind: ClassVar[RequestKind]

    @classmethod
    def request_type(cls) -> str:
        """Request type identifier (class name)."""
        return cls.__name__


class Command(Request):
    """Request that changes system state."""

    kind: ClassVar[RequestKind] = RequestKind.COMMAND


class Query(Request):
    """Request that only reads state."""

    kind: ClassVar[RequestKind] = RequestKind.QUERY
