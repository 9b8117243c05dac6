"""conduit - request orchestration pipeline.

Typed commands and queries are validated, routed to exactly one handler,
executed inside a Unit-of-Work and returned as a Result, wrapped by
correlation, logging, deadline and exception-translation middleware.

Structure:
- core/: Result type, error model, validation primitives, config, container
- domain/: Sample order domain (entities, events, protocols)
- application/: Requests, CQRS registry, pipeline, dispatcher, handlers
- infrastructure/: Logging, event bus, persistence, resilience adapters
- presentation/: Inbound gateway and result envelope schemas
"""

__version__ = "0.1.0"
