"""Inventory service HTTP client.

Implements InventoryGatewayProtocol over httpx. Every call goes through
the injected resilient caller, so retries and circuit breaking apply.

Response interpretation:
    - 200: JSON body {"sku": str, "available": int}
    - 404: SKU unknown to the inventory -> zero stock
    - 429, 5xx, timeouts, connection errors: retryable
    - other 4xx, malformed bodies: not retryable

Architecture:
    - Infrastructure layer (adapter for an external API)
    - Returns Result types (no exceptions cross the adapter)
"""

from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError

from conduit.application.pipeline.context import get_correlation_id
from conduit.core.constants import EXTERNAL_TIMEOUT_DEFAULT, RESPONSE_BODY_MAX_LENGTH
from conduit.core.errors import DependencyError, ExternalCallError
from conduit.core.result import Result
from conduit.domain.protocols.inventory_gateway_protocol import StockLevel
from conduit.domain.protocols.logger_protocol import LoggerProtocol
from conduit.domain.protocols.resilient_caller_protocol import ResilientCallerProtocol


class StockResponse(BaseModel):
    """Inventory service stock payload."""

    sku: str
    available: int = Field(ge=0)


class HttpInventoryGateway:
    """Inventory service client.

    Attributes:
        _base_url: Service base URL (without trailing slash).
        _timeout: Per-request timeout in seconds.
        _caller: Resilient caller (retry + circuit breaker).
        _transport: Optional httpx transport (tests use httpx.MockTransport).

    Example:
        >>> gateway = HttpInventoryGateway(
        ...     base_url="http://inventory:8081",
        ...     caller=get_resilient_caller("inventory"),
        ...     logger=get_logger(),
        ... )
        >>> result = await gateway.check_availability("SKU-1", 2)
    """

    def __init__(
        self,
        *,
        base_url: str,
        caller: ResilientCallerProtocol,
        logger: LoggerProtocol,
        timeout: float = EXTERNAL_TIMEOUT_DEFAULT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._caller = caller
        self._logger = logger
        self._timeout = timeout
        self._transport = transport

    async def check_availability(
        self, sku: str, quantity: int
    ) -> Result[StockLevel, DependencyError]:
        """Look up stock for a SKU.

        Args:
            sku: Stock keeping unit.
            quantity: Requested units.

        Returns:
            Success(StockLevel) or Failure(DependencyError).
        """

        async def fetch() -> StockLevel:
            return await self._fetch_stock(sku, quantity)

        return await self._caller.call(fetch, operation_name="check_availability")

    async def _fetch_stock(self, sku: str, quantity: int) -> StockLevel:
        response = await self._execute_request(
            method="GET",
            path=f"/stock/{sku}",
            params={"quantity": str(quantity)},
            operation="check_availability",
        )
        if response.status_code == 404:
            return StockLevel(sku=sku, available=0)
        self._raise_for_status(response, "check_availability")
        payload = self._parse_json(response, "check_availability")
        try:
            stock = StockResponse.model_validate(payload)
        except ValidationError as e:
            raise ExternalCallError(
                f"Inventory returned an invalid stock payload: {e.error_count()} error(s)",
                retryable=False,
            ) from e
        return StockLevel(sku=stock.sku, available=stock.available)

    async def _execute_request(
        self,
        *,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        operation: str,
    ) -> httpx.Response:
        """Execute HTTP request, mapping transport failures to ExternalCallError.

        Raises:
            ExternalCallError: On timeout (retryable, is_timeout) or
                connection error (retryable).
        """
        url = f"{self._base_url}{path}"
        headers = {"Accept": "application/json"}
        correlation_id = get_correlation_id()
        if correlation_id is not None:
            headers["X-Correlation-Id"] = correlation_id
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                return await client.request(
                    method=method, url=url, headers=headers, params=params
                )
        except httpx.TimeoutException as e:
            self._logger.warning(
                "inventory_api_timeout", operation=operation, error_message=str(e)
            )
            raise ExternalCallError(
                "Inventory request timed out", retryable=True, is_timeout=True
            ) from e
        except httpx.RequestError as e:
            self._logger.warning(
                "inventory_api_connection_error",
                operation=operation,
                error_message=str(e),
            )
            raise ExternalCallError(
                f"Failed to connect to inventory service: {e}", retryable=True
            ) from e

    def _raise_for_status(self, response: httpx.Response, operation: str) -> None:
        """Map non-200 responses to ExternalCallError.

        Raises:
            ExternalCallError: retryable for 429 and 5xx, otherwise not.
        """
        status = response.status_code
        if status == 200:
            return

        if status == 429:
            retry_after = response.headers.get("Retry-After")
            retry_after_ms = (
                int(retry_after) * 1000 if retry_after and retry_after.isdigit() else None
            )
            self._logger.warning(
                "inventory_api_rate_limited",
                operation=operation,
                retry_after_ms=retry_after_ms,
            )
            raise ExternalCallError(
                "Inventory rate limit exceeded",
                retryable=True,
                retry_after_ms=retry_after_ms,
            )

        body = response.text[:RESPONSE_BODY_MAX_LENGTH]
        if status >= 500:
            self._logger.warning(
                "inventory_api_server_error",
                operation=operation,
                status_code=status,
                response_body=body,
            )
            raise ExternalCallError(
                f"Inventory service error (HTTP {status})", retryable=True
            )

        self._logger.warning(
            "inventory_api_request_rejected",
            operation=operation,
            status_code=status,
            response_body=body,
        )
        raise ExternalCallError(
            f"Inventory rejected the request (HTTP {status})", retryable=False
        )

    def _parse_json(self, response: httpx.Response, operation: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            self._logger.warning(
                "inventory_api_invalid_json",
                operation=operation,
                response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
            )
            raise ExternalCallError(
                "Inventory returned a malformed response", retryable=False
            ) from e
