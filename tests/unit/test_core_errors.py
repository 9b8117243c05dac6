"""Unit tests for the Result type and the DomainError hierarchy."""

import dataclasses

import pytest

from conduit.core.enums import ErrorCode, ErrorKind
from conduit.core.errors import (
    ConflictError,
    DependencyError,
    DomainError,
    NotFoundError,
    RegistryConfigurationError,
    UnexpectedError,
    UnregisteredRequestError,
    ValidationError,
    ValidationFailure,
)
from conduit.core.result import Failure, Success, is_failure, is_result, is_success


@pytest.mark.unit
class TestResult:
    def test_success_carries_value(self):
        result = Success(value=42)

        assert result.value == 42
        assert is_success(result)
        assert not is_failure(result)

    def test_failure_carries_error(self):
        error = UnexpectedError(code=ErrorCode.UNEXPECTED_ERROR, message="boom")
        result = Failure(error=error)

        assert result.error is error
        assert is_failure(result)
        assert not is_success(result)

    def test_is_result_rejects_other_values(self):
        assert is_result(Success(value=None))
        assert is_result(Failure(error="x"))
        assert not is_result(None)
        assert not is_result({"ok": True})

    def test_results_are_immutable(self):
        result = Success(value=1)

        with pytest.raises(dataclasses.FrozenInstanceError):
            result.value = 2  # type: ignore[misc]

    def test_pattern_matching(self):
        match Failure(error="bad"):
            case Success():
                matched = "success"
            case Failure(error=error):
                matched = error

        assert matched == "bad"


@pytest.mark.unit
class TestDomainErrors:
    @pytest.mark.parametrize(
        ("error", "kind"),
        [
            (
                ValidationError(code=ErrorCode.VALIDATION_FAILED, message="m"),
                ErrorKind.VALIDATION,
            ),
            (
                NotFoundError(
                    code=ErrorCode.ORDER_NOT_FOUND,
                    message="m",
                    resource_type="Order",
                    resource_id="1",
                ),
                ErrorKind.NOT_FOUND,
            ),
            (
                ConflictError(
                    code=ErrorCode.RESOURCE_CONFLICT, message="m", resource_type="Order"
                ),
                ErrorKind.CONFLICT,
            ),
            (
                DependencyError(
                    code=ErrorCode.PERSISTENCE_FAILED, message="m", dependency="db"
                ),
                ErrorKind.DEPENDENCY,
            ),
            (
                UnexpectedError(code=ErrorCode.UNEXPECTED_ERROR, message="m"),
                ErrorKind.UNEXPECTED,
            ),
        ],
    )
    def test_each_error_pins_its_kind(self, error: DomainError, kind: ErrorKind):
        assert error.kind == kind

    def test_domain_error_is_not_an_exception(self):
        assert not issubclass(DomainError, BaseException)

    def test_with_correlation_stamps_missing_id(self):
        error = UnexpectedError(code=ErrorCode.UNEXPECTED_ERROR, message="m")

        stamped = error.with_correlation("corr-1")

        assert stamped.correlation_id == "corr-1"
        assert error.correlation_id is None
        assert type(stamped) is UnexpectedError

    def test_with_correlation_keeps_existing_id(self):
        error = UnexpectedError(
            code=ErrorCode.UNEXPECTED_ERROR, message="m", correlation_id="first"
        )

        assert error.with_correlation("second") is error

    def test_validation_error_lists_fields_in_order(self):
        error = ValidationError(
            code=ErrorCode.VALIDATION_FAILED,
            message="2 failures",
            failures=(
                ValidationFailure(field="quantity", message="m", rule="greater_than"),
                ValidationFailure(field="sku", message="m", rule="value_error"),
            ),
        )

        assert error.fields == ["quantity", "sku"]

    def test_str_includes_code(self):
        error = NotFoundError(
            code=ErrorCode.ORDER_NOT_FOUND,
            message="Order not found",
            resource_type="Order",
            resource_id="1",
        )

        assert str(error) == "order_not_found: Order not found"


@pytest.mark.unit
class TestFaultExceptions:
    def test_registry_configuration_error_keeps_every_problem(self):
        error = RegistryConfigurationError(["first", "second"])

        assert error.problems == ["first", "second"]
        assert "first" in str(error) and "second" in str(error)

    def test_unregistered_request_error_is_lookup_error(self):
        error = UnregisteredRequestError("Ping")

        assert isinstance(error, LookupError)
        assert error.request_type == "Ping"
