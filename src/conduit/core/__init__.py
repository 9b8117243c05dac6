"""Core layer - cross-cutting primitives shared by every other layer.

Structure:
- result.py: Success/Failure Result type
- errors/: DomainError hierarchy (errors as data) and fault exceptions
- enums/: ErrorKind, ErrorCode, Environment
- validation.py: Validation rule builders and constraint checking
- config.py: Settings loaded from environment variables
- container/: Composition root (dependency wiring)
"""
