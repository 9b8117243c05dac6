"""Infrastructure layer - adapters implementing the domain protocols.

Structure:
- logging/: structlog adapter (LoggerProtocol)
- events/: in-memory event bus (EventBusProtocol) and event handlers
- persistence/: SQLAlchemy async database, models, repositories, unit of work
- resilience/: retry policy, circuit breaker, resilient caller
- external/: httpx inventory service client
"""
