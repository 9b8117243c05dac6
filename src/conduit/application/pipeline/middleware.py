"""Middleware protocol and chain composition.

A middleware stage wraps everything below it. It receives the request,
its correlation context, and ``call_next`` (the rest of the chain), and
returns a Result. Stages may short-circuit (not call ``call_next``),
transform the Result on the way out, or translate faults.

The chain is composed once at startup by ``compose``; there is no hidden
global registration.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol

from conduit.application.pipeline.context import CorrelationContext
from conduit.core.result import Result

type NextStage = Callable[[Any, CorrelationContext], Awaitable[Result[Any, Any]]]


class Middleware(Protocol):
    """One pipeline stage."""

    name: str

    async def __call__(
        self,
        request: Any,
        context: CorrelationContext,
        call_next: NextStage,
    ) -> Result[Any, Any]: ...


def compose(stages: Sequence[Middleware], terminal: NextStage) -> NextStage:
    """Build the chain: ``stages[0]`` outermost, ``terminal`` innermost.

    Args:
        stages: Middleware stages, outermost first.
        terminal: Final stage (the dispatcher).

    Returns:
        Callable running the whole chain for one request.
    """
    chain = terminal
    for stage in reversed(stages):
        chain = _link(stage, chain)
    return chain


def _link(stage: Middleware, call_next: NextStage) -> NextStage:
    async def run(request: Any, context: CorrelationContext) -> Result[Any, Any]:
        return await stage(request, context, call_next)

    return run
