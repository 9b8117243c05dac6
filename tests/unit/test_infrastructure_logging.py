"""Unit tests for ConsoleAdapter and the correlation processor."""

import json

import pytest
import structlog

from conduit.application.pipeline.context import CorrelationContext, use_context
from conduit.infrastructure.logging.console_adapter import ConsoleAdapter
from conduit.infrastructure.logging.processors import add_correlation_context
from tests.utils.requests import Ping


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def _lines(capsys) -> list[dict]:
    return [json.loads(line) for line in capsys.readouterr().out.splitlines()]


@pytest.mark.unit
class TestConsoleAdapter:
    def test_json_output_carries_context(self, capsys):
        ConsoleAdapter(use_json=True).info("order_staged", order_id="o-1")

        [line] = _lines(capsys)
        assert line["event"] == "order_staged"
        assert line["level"] == "info"
        assert line["order_id"] == "o-1"
        assert "timestamp" in line

    def test_level_filters_lower_messages(self, capsys):
        logger = ConsoleAdapter(use_json=True, level="WARNING")

        logger.info("hidden")
        logger.warning("shown")

        assert [line["event"] for line in _lines(capsys)] == ["shown"]

    def test_error_expands_exception(self, capsys):
        ConsoleAdapter(use_json=True).error("boom", error=ValueError("bad value"))

        [line] = _lines(capsys)
        assert line["error_type"] == "ValueError"
        assert line["error_message"] == "bad value"

    def test_bound_context_is_kept(self, capsys):
        ConsoleAdapter(use_json=True).bind(component="inventory").info("ready")

        [line] = _lines(capsys)
        assert line["component"] == "inventory"

    async def test_lines_inside_request_carry_correlation_id(self, capsys):
        logger = ConsoleAdapter(use_json=True)
        context = CorrelationContext.for_request(Ping(), correlation_id="corr-l")

        with use_context(context):
            logger.info("inside")
        logger.info("outside")

        inside, outside = _lines(capsys)
        assert inside["correlation_id"] == "corr-l"
        assert inside["request_type"] == "Ping"
        assert "correlation_id" not in outside


@pytest.mark.unit
class TestCorrelationProcessor:
    def test_explicit_value_wins(self):
        context = CorrelationContext.for_request(Ping(), correlation_id="active")

        with use_context(context):
            event = add_correlation_context(None, "info", {"correlation_id": "given"})

        assert event["correlation_id"] == "given"

    def test_outside_request_unchanged(self):
        assert add_correlation_context(None, "info", {"event": "x"}) == {"event": "x"}
