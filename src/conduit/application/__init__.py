"""Application layer - use cases and request orchestration.

Structure:
- requests.py: Command / Query request contracts
- unit_of_work.py: Unit-of-Work state machine (transactional boundary)
- cqrs/: Catalog of requests and the immutable handler registry
- pipeline/: Correlation context, middleware stages, dispatcher
- commands/, queries/: Sample order use cases and their handlers
- dtos/: Read models returned by query handlers
"""
