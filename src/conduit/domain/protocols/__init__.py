"""Domain protocols (ports) package.

Protocol definitions for every outbound collaborator the application
layer consumes. Infrastructure adapters implement these protocols without
inheritance.

IMPORTANT: Re-exports are ONLY for protocols defined in this package.

Usage:
    from conduit.domain.protocols import EventBusProtocol, LoggerProtocol
    from conduit.domain.protocols import OrderRepository, OrderUnitOfWork
"""

# Service protocols
from conduit.domain.protocols.event_bus_protocol import EventBusProtocol, EventHandler
from conduit.domain.protocols.inventory_gateway_protocol import (
    InventoryGatewayProtocol,
    StockLevel,
)
from conduit.domain.protocols.logger_protocol import LoggerProtocol
from conduit.domain.protocols.resilient_caller_protocol import ResilientCallerProtocol

# Persistence protocols
from conduit.domain.protocols.order_repository import OrderRepository
from conduit.domain.protocols.unit_of_work_protocol import OrderUnitOfWork

__all__ = [
    # Service protocols
    "EventBusProtocol",
    "EventHandler",
    "InventoryGatewayProtocol",
    "LoggerProtocol",
    "ResilientCallerProtocol",
    "StockLevel",
    # Persistence protocols
    "OrderRepository",
    "OrderUnitOfWork",
]
