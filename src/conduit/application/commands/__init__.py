"""Commands (state-changing requests) and their handlers."""

from conduit.application.commands.order_commands import CancelOrder, CreateOrder

__all__ = ["CancelOrder", "CreateOrder"]
