"""Validation rule primitives.

Two sources of rules apply to every request:

1. Field constraints declared with ``Annotated`` + pydantic ``Field`` /
   ``AfterValidator`` on the request dataclass. ``constraint_failures``
   checks all of them at once through a cached ``TypeAdapter`` (pydantic
   reports every failing field, it never stops at the first).
2. Declared rules: pure callables ``rule(request) -> Iterable[ValidationFailure]``
   listed in the request's catalog metadata, for invariants spanning several
   fields. The builders below produce the common ones.

Rules are pure: no mutation, no I/O.

Usage:
    from conduit.core.validation import require_positive, require_product_at_most

    rules = (
        require_positive("quantity"),
        require_product_at_most("quantity", "unit_price", Decimal("1000")),
    )
"""

import dataclasses
from collections.abc import Callable, Iterable, Mapping
from decimal import Decimal
from functools import lru_cache
from typing import Any, get_type_hints

from pydantic import Field, TypeAdapter, create_model
from pydantic import ValidationError as PydanticValidationError

from conduit.core.errors import ValidationFailure

type ValidationRule = Callable[[Any], Iterable[ValidationFailure]]


# =============================================================================
# Field constraints (Annotated types)
# =============================================================================


@lru_cache(maxsize=None)
def get_type_adapter(request_class: type) -> TypeAdapter[Any]:
    """Return the cached pydantic TypeAdapter for a request class."""
    return TypeAdapter(request_class)


@lru_cache(maxsize=None)
def get_payload_adapter(request_class: type) -> TypeAdapter[Any]:
    """Return a cached TypeAdapter checking only a request's field types.

    The adapter wraps a model mirroring the request dataclass with the
    ``Annotated`` metadata stripped: values are coerced to the declared
    types, but no Field constraint or AfterValidator runs. Used to decode
    serialized payloads before they enter the pipeline.
    """
    hints = get_type_hints(request_class)
    fields: dict[str, Any] = {}
    for field in dataclasses.fields(request_class):
        if field.default is not dataclasses.MISSING:
            default: Any = field.default
        elif field.default_factory is not dataclasses.MISSING:
            default = Field(default_factory=field.default_factory)
        else:
            default = ...
        fields[field.name] = (hints[field.name], default)
    return TypeAdapter(create_model(f"{request_class.__name__}Payload", **fields))


def decode_payload(
    request_class: type, payload: str | bytes | Mapping[str, Any]
) -> Any:
    """Build a request instance from a serialized payload.

    Only structure and field types are checked; constraints are left to the
    validation stage.

    Raises:
        pydantic.ValidationError: Malformed JSON or uncoercible field values.
    """
    adapter = get_payload_adapter(request_class)
    if isinstance(payload, (str, bytes)):
        decoded = adapter.validate_json(payload)
    else:
        decoded = adapter.validate_python(dict(payload))
    return request_class(**dict(decoded))


def failures_from_pydantic(exc: PydanticValidationError) -> list[ValidationFailure]:
    """Convert a pydantic ValidationError into ValidationFailure entries.

    Args:
        exc: Pydantic validation error (carries every failing field).

    Returns:
        One failure per pydantic error, in pydantic's order.
    """
    failures: list[ValidationFailure] = []
    for error in exc.errors(include_url=False):
        location = ".".join(str(part) for part in error.get("loc", ()))
        failures.append(
            ValidationFailure(
                field=location or "__root__",
                message=error.get("msg", "Invalid value"),
                rule=error.get("type", "invalid"),
            )
        )
    return failures


def constraint_failures(request: Any) -> list[ValidationFailure]:
    """Check every Annotated field constraint of a request dataclass.

    The request is re-validated from its field values; the validated copy is
    discarded, the request itself is never modified.

    Args:
        request: Frozen request dataclass instance.

    Returns:
        List of failures (empty when all constraints hold).
    """
    payload = {
        field.name: getattr(request, field.name)
        for field in dataclasses.fields(request)
    }
    try:
        get_type_adapter(type(request)).validate_python(payload)
    except PydanticValidationError as exc:
        return failures_from_pydantic(exc)
    return []


# =============================================================================
# Declared rule builders
# =============================================================================


def field_rule(
    field: str,
    predicate: Callable[[Any], bool],
    *,
    message: str,
    rule: str,
) -> ValidationRule:
    """Build a rule that checks one field with a predicate.

    The predicate is only evaluated for non-None values; missing optional
    values pass.

    Args:
        field: Attribute name on the request.
        predicate: Returns True when the value is valid.
        message: Failure message.
        rule: Rule identifier reported in the failure.

    Returns:
        Validation rule callable.
    """

    def check(request: Any) -> list[ValidationFailure]:
        value = getattr(request, field, None)
        if value is None or predicate(value):
            return []
        return [ValidationFailure(field=field, message=message, rule=rule)]

    check.__name__ = f"{rule}__{field}"
    return check


def require_positive(field: str) -> ValidationRule:
    """Field must be greater than zero."""
    return field_rule(
        field,
        lambda value: value > 0,
        message=f"{field} must be greater than 0",
        rule="positive",
    )


def require_not_blank(field: str) -> ValidationRule:
    """String field must contain non-whitespace characters."""
    return field_rule(
        field,
        lambda value: bool(str(value).strip()),
        message=f"{field} cannot be blank",
        rule="not_blank",
    )


def require_max_length(field: str, max_length: int) -> ValidationRule:
    """String field must be at most max_length characters."""
    return field_rule(
        field,
        lambda value: len(str(value)) <= max_length,
        message=f"{field} must be at most {max_length} characters",
        rule="max_length",
    )


def require_product_at_most(
    left: str, right: str, limit: Decimal, *, field: str | None = None
) -> ValidationRule:
    """Product of two numeric fields must not exceed limit.

    Skipped when either operand is missing or not numeric; those cases are
    reported by the field constraints.

    Args:
        left: First operand field name.
        right: Second operand field name.
        limit: Inclusive upper bound.
        field: Field to attach the failure to (defaults to ``right``).

    Returns:
        Validation rule callable.
    """
    target = field or right

    def check(request: Any) -> list[ValidationFailure]:
        a = getattr(request, left, None)
        b = getattr(request, right, None)
        if not isinstance(a, (int, Decimal)) or not isinstance(b, (int, Decimal)):
            return []
        if Decimal(a) * Decimal(b) <= limit:
            return []
        return [
            ValidationFailure(
                field=target,
                message=f"{left} x {right} must not exceed {limit}",
                rule="product_at_most",
            )
        ]

    check.__name__ = f"product_at_most__{left}__{right}"
    return check


def run_rules(request: Any, rules: Iterable[ValidationRule]) -> list[ValidationFailure]:
    """Run every rule against a request, collecting all failures in order."""
    failures: list[ValidationFailure] = []
    for rule in rules:
        failures.extend(rule(request))
    return failures
