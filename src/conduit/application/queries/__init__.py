"""Queries (read-only requests) and their handlers."""

from conduit.application.queries.order_queries import GetOrder, ListCustomerOrders

__all__ = ["GetOrder", "ListCustomerOrders"]
