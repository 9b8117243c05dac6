"""Validator functions for Annotated field types.

Each function receives an already type-checked value, returns it
unchanged when valid, and raises ValueError otherwise. Pydantic turns
the ValueError into a field failure.

Validators check, they do not normalize: the validation stage discards
pydantic's validated copy and dispatches the request exactly as built.
"""

import re

SKU_PATTERN = re.compile(r"^[A-Z0-9][A-Z0-9-]{2,31}$")
CLIENT_REFERENCE_PATTERN = re.compile(r"^[A-Za-z0-9._:-]+$")


def validate_sku(value: str) -> str:
    """Validate a stock keeping unit.

    Args:
        value: SKU to check.

    Returns:
        The SKU unchanged.

    Raises:
        ValueError: If the SKU is not 3-32 upper-case letters, digits or
            dashes starting with a letter or digit.
    """
    if not SKU_PATTERN.match(value):
        raise ValueError(
            "SKU must be 3-32 upper-case letters, digits or dashes"
        )
    return value


def validate_client_reference(value: str) -> str:
    """Validate an idempotency reference supplied by the client.

    Raises:
        ValueError: If the reference contains characters outside
            letters, digits and ``._:-``.
    """
    if not CLIENT_REFERENCE_PATTERN.match(value):
        raise ValueError("Client reference may only contain letters, digits and ._:-")
    return value
