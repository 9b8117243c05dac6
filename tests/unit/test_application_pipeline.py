"""Unit tests for RequestPipeline and its stages.

Covers stage order, validation short-circuit, exception translation,
correlation stamping and request logging. Deadline and cancellation
behaviour lives in test_application_pipeline_deadline.py.
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from conduit.application.pipeline.context import (
    CorrelationContext,
    get_correlation_id,
    get_current_context,
)
from conduit.application.pipeline.dispatcher import Dispatcher
from conduit.application.pipeline.middleware import compose
from conduit.application.pipeline.pipeline import RequestPipeline
from conduit.application.pipeline.stages import CorrelationMiddleware
from conduit.application.requests import RequestKind
from conduit.application.unit_of_work import UnitOfWorkState
from conduit.core.constants import UNEXPECTED_ERROR_MESSAGE
from conduit.core.enums import ErrorCode, ErrorKind
from conduit.core.errors import UnexpectedError, UnregisteredRequestError
from conduit.core.result import Failure, Success
from tests.utils.fakes import logged
from tests.utils.requests import Lookup, Ping, PingHandler, Unregistered, build_registry


@pytest.fixture
def handler() -> PingHandler:
    return PingHandler()


@pytest.fixture
def pipeline(handler, uow_factory, mock_logger) -> RequestPipeline:
    registry = build_registry(ping_handler=handler)
    return RequestPipeline(
        registry=registry,
        dispatcher=Dispatcher(
            registry=registry,
            uow_factory=uow_factory,
            event_bus=AsyncMock(),
            logger=mock_logger,
        ),
        logger=mock_logger,
        request_timeout=5.0,
        cancellation_grace=0.5,
    )


@pytest.mark.unit
class TestPipelineShape:
    def test_stage_order_is_fixed(self, pipeline):
        assert pipeline.stages == (
            "correlation",
            "logging",
            "deadline",
            "exception_translation",
            "validation",
            "dispatch",
        )

    async def test_unregistered_request_is_a_wiring_error(self, pipeline):
        with pytest.raises(UnregisteredRequestError):
            await pipeline.send(Unregistered())

    async def test_compose_runs_stages_outermost_first(self):
        seen: list[str] = []

        class Stage:
            def __init__(self, name: str) -> None:
                self.name = name

            async def __call__(self, request, context, call_next):
                seen.append(f"{self.name}:in")
                result = await call_next(request, context)
                seen.append(f"{self.name}:out")
                return result

        async def terminal(request, context):
            seen.append("terminal")
            return Success(value=None)

        chain = compose([Stage("a"), Stage("b")], terminal)
        await chain(Ping(), CorrelationContext.for_request(Ping()))

        assert seen == ["a:in", "b:in", "terminal", "b:out", "a:out"]


@pytest.mark.unit
class TestPipelineSuccess:
    async def test_valid_request_reaches_handler_once(self, pipeline, handler, uow_factory):
        result = await pipeline.send(Ping(count=2))

        assert result == Success(value=2)
        assert len(handler.calls) == 1
        assert len(uow_factory.created) == 1

    async def test_context_carries_request_identity(self, pipeline, handler):
        await pipeline.send(Ping(), correlation_id="corr-42", timeout=1.0)

        context = handler.calls[0][1]
        assert context.correlation_id == "corr-42"
        assert context.request_type == "Ping"
        assert context.request_kind == RequestKind.COMMAND
        assert context.deadline is not None

    async def test_correlation_id_generated_when_missing(self, pipeline, handler):
        await pipeline.send(Ping())
        await pipeline.send(Ping())

        first, second = (call[1].correlation_id for call in handler.calls)
        assert first and second and first != second

    async def test_query_dispatch(self, pipeline):
        result = await pipeline.send(Lookup(key="present"))

        assert result == Success(value={"key": "present"})

    async def test_logs_start_and_success(self, pipeline, mock_logger):
        await pipeline.send(Ping(), correlation_id="corr-1")

        [(level, started)] = logged(mock_logger, "request_started")
        assert level == "info"
        assert started["correlation_id"] == "corr-1"
        assert started["request_kind"] == "command"
        [(level, succeeded)] = logged(mock_logger, "request_succeeded")
        assert level == "info"
        assert succeeded["duration_ms"] >= 0


@pytest.mark.unit
class TestPipelineValidation:
    async def test_invalid_request_never_reaches_handler(
        self, pipeline, handler, uow_factory
    ):
        result = await pipeline.send(Ping(count=-1))

        assert isinstance(result, Failure)
        assert result.error.kind == ErrorKind.VALIDATION
        assert result.error.code == ErrorCode.VALIDATION_FAILED
        assert result.error.fields == ["count"]
        assert handler.calls == []
        assert uow_factory.created == []

    async def test_every_failure_reported(self, pipeline):
        result = await pipeline.send(Ping(count=-1, price=Decimal("0")))

        assert result.error.fields == ["count", "price"]
        assert [f.rule for f in result.error.failures] == [
            "greater_than",
            "greater_than",
        ]

    async def test_declared_rules_run_after_constraints(self, pipeline):
        result = await pipeline.send(Ping(count=101, price=Decimal("1.00")))

        [failure] = result.error.failures
        assert failure.field == "price"
        assert failure.rule == "product_at_most"

    async def test_validation_failure_carries_correlation_id(self, pipeline):
        result = await pipeline.send(Ping(count=0), correlation_id="corr-7")

        assert result.error.correlation_id == "corr-7"

    async def test_validation_failure_logged_as_warning(self, pipeline, mock_logger):
        await pipeline.send(Ping(count=0))

        [(level, context)] = logged(mock_logger, "request_failed")
        assert level == "warning"
        assert context["error_kind"] == "validation_error"


@pytest.mark.unit
class TestPipelineFailures:
    async def test_handler_failure_stamped_with_correlation_id(self, pipeline, handler):
        handler.outcome = "failure"

        result = await pipeline.send(Ping(), correlation_id="corr-9")

        assert result.error.kind == ErrorKind.NOT_FOUND
        assert result.error.correlation_id == "corr-9"

    async def test_raised_fault_translated_once(
        self, pipeline, handler, mock_logger, uow_factory
    ):
        handler.outcome = "raise"

        result = await pipeline.send(Ping(), correlation_id="corr-3")

        assert isinstance(result, Failure)
        assert isinstance(result.error, UnexpectedError)
        assert result.error.message == UNEXPECTED_ERROR_MESSAGE
        assert "exploded" not in result.error.message
        assert result.error.correlation_id == "corr-3"
        assert uow_factory.created[0].state == UnitOfWorkState.ROLLED_BACK

        [(level, context)] = logged(mock_logger, "unexpected_error")
        assert level == "error"
        assert context["exc_info"] is True
        assert isinstance(context["error"], RuntimeError)

    async def test_logging_observes_translated_outcome(
        self, pipeline, handler, mock_logger
    ):
        handler.outcome = "raise"

        await pipeline.send(Ping())

        [(level, context)] = logged(mock_logger, "request_failed")
        assert level == "error"
        assert context["error_kind"] == "unexpected_error"
        assert context["error_code"] == "unexpected_error"

    async def test_non_result_handler_translated(self, pipeline, handler):
        handler.outcome = "not_result"

        result = await pipeline.send(Ping())

        assert result.error.kind == ErrorKind.UNEXPECTED

    async def test_failure_without_domain_error_translated(
        self, pipeline, handler, mock_logger
    ):
        handler.outcome = "bare_failure"

        result = await pipeline.send(Ping(), correlation_id="corr-bare")

        assert result.error.kind == ErrorKind.UNEXPECTED
        assert result.error.correlation_id == "corr-bare"
        assert "storage down" not in result.error.message
        assert logged(mock_logger, "request_failed")


@pytest.mark.unit
class TestCorrelationMiddleware:
    async def test_publishes_context_during_the_call(self):
        context = CorrelationContext.for_request(Ping(), correlation_id="corr-5")
        seen = {}

        async def call_next(request, ctx):
            seen["context"] = get_current_context()
            seen["correlation_id"] = get_correlation_id()
            return Success(value=None)

        await CorrelationMiddleware()(Ping(), context, call_next)

        assert seen == {"context": context, "correlation_id": "corr-5"}
        assert get_current_context() is None

    async def test_keeps_existing_error_correlation_id(self):
        context = CorrelationContext.for_request(Ping(), correlation_id="outer")

        async def call_next(request, ctx):
            return Failure(
                error=UnexpectedError(
                    code=ErrorCode.UNEXPECTED_ERROR, message="m", correlation_id="inner"
                )
            )

        result = await CorrelationMiddleware()(Ping(), context, call_next)

        assert result.error.correlation_id == "inner"
