"""Annotated types with centralized validation (DRY principle).

Define validation once, use on every request dataclass. The validation
stage checks these constraints through pydantic before a request is
dispatched.

Usage:
    from conduit.domain.types import Quantity, Sku

    @dataclass(frozen=True, kw_only=True)
    class CreateOrder(Command):
        sku: Sku
        quantity: Quantity
"""

from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, Field

from conduit.core.constants import MAX_PAGE_LIMIT
from conduit.domain.validators import validate_client_reference, validate_sku

# ============================================================================
# Order Types
# ============================================================================

Sku = Annotated[
    str,
    Field(min_length=3, max_length=32, description="Stock keeping unit"),
    AfterValidator(validate_sku),
]
"""Upper-case stock keeping unit."""

Quantity = Annotated[
    int,
    Field(gt=0, le=10_000, description="Number of units"),
]
"""Positive unit count."""

UnitPrice = Annotated[
    Decimal,
    Field(gt=0, max_digits=12, decimal_places=2, description="Price per unit"),
]
"""Positive price with at most two decimal places."""

ClientReference = Annotated[
    str,
    Field(min_length=1, max_length=64, description="Client idempotency reference"),
    AfterValidator(validate_client_reference),
]
"""Reference the client uses to avoid placing the same order twice."""

CancellationReason = Annotated[
    str,
    Field(min_length=1, max_length=500, description="Why the order is cancelled"),
]
"""Free-text cancellation reason."""

# ============================================================================
# Pagination Types
# ============================================================================

PageLimit = Annotated[
    int,
    Field(ge=1, le=MAX_PAGE_LIMIT, description="Maximum items per page"),
]

PageOffset = Annotated[
    int,
    Field(ge=0, description="Items to skip"),
]
