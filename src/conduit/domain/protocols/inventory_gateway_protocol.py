"""Inventory gateway protocol (external stock service)."""

from dataclasses import dataclass
from typing import Protocol

from conduit.core.errors import DependencyError
from conduit.core.result import Result


@dataclass(frozen=True, slots=True, kw_only=True)
class StockLevel:
    """Stock availability for one SKU.

    Attributes:
        sku: Stock keeping unit.
        available: Units currently available.
    """

    sku: str
    available: int

    def covers(self, quantity: int) -> bool:
        """Check whether the requested quantity is in stock."""
        return self.available >= quantity


class InventoryGatewayProtocol(Protocol):
    """Protocol for the inventory service client."""

    async def check_availability(
        self, sku: str, quantity: int
    ) -> Result[StockLevel, DependencyError]:
        """Look up stock for a SKU.

        Args:
            sku: Stock keeping unit.
            quantity: Requested units (lets the service reserve-check).

        Returns:
            Success(StockLevel) or Failure(DependencyError) when the service
            fails, times out, or its circuit is open.
        """
        ...
