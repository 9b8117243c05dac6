"""structlog processors."""

from typing import Any

from conduit.application.pipeline.context import get_current_context


def add_correlation_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add correlation_id and request_type of the active request.

    Values passed explicitly in the log call win. Outside a request the
    event is left unchanged.
    """
    context = get_current_context()
    if context is not None:
        event_dict.setdefault("correlation_id", context.correlation_id)
        event_dict.setdefault("request_type", context.request_type)
    return event_dict
