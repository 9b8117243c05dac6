"""Presentation layer - transport-agnostic inbound surface.

The hosting layer (HTTP framework, message consumer, CLI) maps its own
addressing to a request type name and calls the matching gateway entry
point with the serialized payload.
"""

from conduit.presentation.gateway import EntryPoint, RequestGateway
from conduit.presentation.schemas import ErrorBody, FailureDetail, ResultEnvelope

__all__ = ["EntryPoint", "ErrorBody", "FailureDetail", "RequestGateway", "ResultEnvelope"]
