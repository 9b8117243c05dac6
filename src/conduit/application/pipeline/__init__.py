"""Request pipeline: correlation context, middleware stages, dispatcher.

Import from submodules inside the application package; this namespace is
for callers outside it.
"""

from conduit.application.pipeline.context import (
    CorrelationContext,
    get_correlation_id,
    get_current_context,
    new_correlation_id,
)
from conduit.application.pipeline.dispatcher import Dispatcher, UnitOfWorkFactory
from conduit.application.pipeline.middleware import Middleware, NextStage, compose
from conduit.application.pipeline.pipeline import RequestPipeline
from conduit.application.pipeline.stages import (
    CorrelationMiddleware,
    DeadlineMiddleware,
    ExceptionTranslationMiddleware,
    LoggingMiddleware,
    ValidationMiddleware,
)
from conduit.application.pipeline.validator import RequestValidator

__all__ = [
    "CorrelationContext",
    "CorrelationMiddleware",
    "DeadlineMiddleware",
    "Dispatcher",
    "ExceptionTranslationMiddleware",
    "LoggingMiddleware",
    "Middleware",
    "NextStage",
    "RequestPipeline",
    "RequestValidator",
    "UnitOfWorkFactory",
    "ValidationMiddleware",
    "compose",
    "get_correlation_id",
    "get_current_context",
    "new_correlation_id",
]
