"""Result envelope schemas.

Every gateway call returns one ResultEnvelope, serialized to a JSON-ready
dict: exactly one of ``value`` (ok=True) or ``error`` (ok=False), plus the
correlation id of the request.
"""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_core import to_jsonable_python

from conduit.core.errors import DomainError, ValidationError
from conduit.core.result import Failure, Result, Success


class FailureDetail(BaseModel):
    """One validation failure."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(..., description="Offending field (dotted path)")
    message: str = Field(..., description="Human-readable explanation")
    rule: str = Field(..., description="Identifier of the failed rule")


class ErrorBody(BaseModel):
    """Error part of the envelope."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., description="Error kind (validation_error, not_found, ...)")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable message")
    correlation_id: str | None = Field(
        default=None, description="Correlation id of the failed request"
    )
    failures: list[FailureDetail] = Field(
        default_factory=list, description="Validation failures (validation errors only)"
    )
    details: dict[str, Any] | None = Field(
        default=None, description="Additional error context"
    )

    @classmethod
    def from_error(cls, error: DomainError) -> Self:
        failures = []
        if isinstance(error, ValidationError):
            failures = [
                FailureDetail(field=f.field, message=f.message, rule=f.rule)
                for f in error.failures
            ]
        return cls(
            kind=error.kind.value,
            code=error.code.value,
            message=error.message,
            correlation_id=error.correlation_id,
            failures=failures,
            details=to_jsonable_python(error.details) if error.details else None,
        )


class ResultEnvelope(BaseModel):
    """Serialized Result."""

    model_config = ConfigDict(frozen=True)

    ok: bool = Field(..., description="True for success, False for error")
    value: Any = Field(default=None, description="Handler value (success only)")
    error: ErrorBody | None = Field(default=None, description="Error (failure only)")
    correlation_id: str | None = Field(
        default=None, description="Correlation id of the request"
    )

    @model_validator(mode="after")
    def check_exactly_one_outcome(self) -> Self:
        if self.ok and self.error is not None:
            raise ValueError("A successful envelope cannot carry an error")
        if not self.ok and (self.error is None or self.value is not None):
            raise ValueError("A failed envelope carries an error and no value")
        return self

    @classmethod
    def from_result(
        cls, result: Result[Any, DomainError], *, correlation_id: str | None
    ) -> Self:
        """Build the envelope for a pipeline Result.

        Raises:
            TypeError: If result is neither Success nor Failure.
        """
        match result:
            case Success(value=value):
                return cls(
                    ok=True,
                    value=to_jsonable_python(value),
                    correlation_id=correlation_id,
                )
            case Failure(error=error):
                return cls(
                    ok=False,
                    error=ErrorBody.from_error(error),
                    correlation_id=error.correlation_id or correlation_id,
                )
        raise TypeError(f"Expected Success or Failure, got {type(result).__name__}")

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict."""
        return self.model_dump(mode="json")
