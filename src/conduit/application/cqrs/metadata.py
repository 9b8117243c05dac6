"""CQRS Metadata Types.

Dataclasses and enums for CQRS catalog entries. Each entry binds one
request class to its single handler class and declares the request's
cross-field validation rules.

Design Principles:
- Immutable (frozen=True) - catalog entries never change at runtime
- Type-safe (kw_only=True) - explicit field assignment
"""

from dataclasses import dataclass
from enum import Enum

from conduit.core.validation import ValidationRule


class CQRSCategory(str, Enum):
    """Categories for CQRS commands and queries (functional area)."""

    ORDERS = "orders"  # Order placement, cancellation and lookup


@dataclass(frozen=True, kw_only=True)
class CommandMetadata:
    """Metadata for a command in the CQRS catalog.

    Attributes:
        command_class: The command dataclass (e.g., CreateOrder).
        handler_class: The handler class (e.g., CreateOrderHandler).
        category: Functional category for organization.
        rules: Declared cross-field validation rules, run in order after
            the field constraints.
        emits_events: Whether this command records domain events.
        description: Human-readable description for documentation.

    Example:
        >>> CommandMetadata(
        ...     command_class=CreateOrder,
        ...     handler_class=CreateOrderHandler,
        ...     category=CQRSCategory.ORDERS,
        ...     rules=(require_product_at_most("quantity", "unit_price", limit),),
        ...     description="Place an order",
        ... )
    """

    command_class: type
    handler_class: type
    category: CQRSCategory
    rules: tuple[ValidationRule, ...] = ()
    emits_events: bool = True
    description: str = ""

    @property
    def request_class(self) -> type:
        return self.command_class


@dataclass(frozen=True, kw_only=True)
class QueryMetadata:
    """Metadata for a query in the CQRS catalog.

    Queries never change state.

    Attributes:
        query_class: The query dataclass (e.g., GetOrder).
        handler_class: The handler class (e.g., GetOrderHandler).
        category: Functional category for organization.
        rules: Declared cross-field validation rules.
        is_paginated: Whether this query supports pagination.
        description: Human-readable description for documentation.
    """

    query_class: type
    handler_class: type
    category: CQRSCategory
    rules: tuple[ValidationRule, ...] = ()
    is_paginated: bool = False
    description: str = ""

    @property
    def request_class(self) -> type:
        return self.query_class


type RequestMetadata = CommandMetadata | QueryMetadata
