"""Field validator functions used by Annotated types."""

from conduit.domain.validators.functions import (
    validate_client_reference,
    validate_sku,
)

__all__ = ["validate_client_reference", "validate_sku"]
