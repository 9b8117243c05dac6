"""Inbound request gateway.

One entry point per registered request type. Each accepts a serialized
payload (JSON text/bytes or an already-decoded mapping) plus deadline,
cancellation and correlation arguments, and returns the serialized
ResultEnvelope.

Payloads are decoded against the request's field types only. A payload
that cannot be decoded into the request (malformed JSON, missing fields,
uncoercible values) yields an ``invalid_payload`` envelope listing every
failure and never reaches the pipeline. Field constraints and declared
rules run in the pipeline's validation stage.

Usage:
    gateway = get_gateway()
    create_order = gateway.entry_points()["CreateOrder"]
    envelope = await create_order('{"customer_id": "...", ...}', timeout=5.0)
"""

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from functools import partial
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from conduit.application.pipeline.context import new_correlation_id
from conduit.application.pipeline.pipeline import RequestPipeline
from conduit.core.enums import ErrorCode
from conduit.core.errors import ValidationError
from conduit.core.result import Failure, Result, Success
from conduit.core.validation import decode_payload, failures_from_pydantic
from conduit.domain.protocols import LoggerProtocol
from conduit.presentation.schemas import ResultEnvelope

type Payload = str | bytes | Mapping[str, Any]
type EntryPoint = Callable[..., Awaitable[dict[str, Any]]]


class RequestGateway:
    """Serialized-payload front door to the request pipeline."""

    def __init__(self, *, pipeline: RequestPipeline, logger: LoggerProtocol) -> None:
        self._pipeline = pipeline
        self._registry = pipeline.registry
        self._logger = logger

    def entry_points(self) -> dict[str, EntryPoint]:
        """One callable per registered request type name.

        Each callable has the signature of ``submit`` without the
        ``request_type`` argument.
        """
        return {
            request_type: partial(self.submit, request_type)
            for request_type in self._registry.request_types
        }

    async def submit(
        self,
        request_type: str,
        payload: Payload,
        *,
        timeout: float | None = None,
        cancel_event: asyncio.Event | None = None,
        correlation_id: str | None = None,
    ) -> dict[str, Any]:
        """Decode payload, run it through the pipeline, serialize the Result.

        Args:
            request_type: Registered request type name (e.g. "CreateOrder").
            payload: JSON text/bytes or mapping of request fields.
            timeout: Deadline in seconds (pipeline default when omitted).
            cancel_event: Optional caller-owned cancellation signal.
            correlation_id: Caller-supplied correlation id (generated if omitted).

        Returns:
            JSON-ready ResultEnvelope dict.

        Raises:
            UnregisteredRequestError: If request_type is not registered.
        """
        registration = self._registry.resolve_name(request_type)
        correlation_id = correlation_id or new_correlation_id()

        decoded = self._decode(registration.request_class, payload, correlation_id)
        match decoded:
            case Failure():
                self._logger.warning(
                    "request_payload_rejected",
                    correlation_id=correlation_id,
                    request_type=request_type,
                    failure_count=len(decoded.error.failures),
                )
                return ResultEnvelope.from_result(
                    decoded, correlation_id=correlation_id
                ).to_wire()
            case Success(value=request):
                result = await self._pipeline.send(
                    request,
                    timeout=timeout,
                    cancel_event=cancel_event,
                    correlation_id=correlation_id,
                )
        return ResultEnvelope.from_result(result, correlation_id=correlation_id).to_wire()

    def _decode(
        self, request_class: type, payload: Payload, correlation_id: str
    ) -> Result[Any, ValidationError]:
        try:
            request = decode_payload(request_class, payload)
        except PydanticValidationError as e:
            failures = failures_from_pydantic(e)
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_PAYLOAD,
                    message=f"Payload failed {len(failures)} validation rule(s)",
                    failures=tuple(failures),
                    correlation_id=correlation_id,
                )
            )
        return Success(value=request)
