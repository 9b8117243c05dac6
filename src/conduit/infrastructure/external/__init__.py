"""Clients for external services."""

from conduit.infrastructure.external.inventory_client import HttpInventoryGateway

__all__ = ["HttpInventoryGateway"]
