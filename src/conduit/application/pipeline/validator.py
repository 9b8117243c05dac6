"""Request validation stage logic.

For a request, runs (1) every Annotated field constraint via pydantic and
(2) every cross-field rule declared in the request's catalog entry, in
declaration order. All rules run; failures are collected, never
short-circuited. Validation is pure: no mutation, no I/O.
"""

from typing import Any

from conduit.application.cqrs.handler_registry import HandlerRegistry
from conduit.core.errors import ValidationFailure
from conduit.core.validation import constraint_failures, run_rules


class RequestValidator:
    """Collects every validation failure of a request."""

    def __init__(self, registry: HandlerRegistry) -> None:
        self._registry = registry

    def validate(self, request: Any) -> list[ValidationFailure]:
        """Run all rules for the request's type.

        Returns:
            Ordered failures: field constraints in field order, then
            declared rules in declaration order. Empty when valid.
        """
        registration = self._registry.resolve(type(request))
        failures = constraint_failures(request)
        failures.extend(run_rules(request, registration.rules))
        return failures
