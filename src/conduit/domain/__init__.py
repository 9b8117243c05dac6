"""Domain layer - Pure business logic for the sample order domain.

This layer has NO dependencies on any framework or infrastructure.

Structure:
- entities/: Domain entities (mutable, have identity)
- enums/: Domain enums
- events/: Domain events (immutable facts)
- protocols/: Ports for every outbound collaborator
- validators/: Field validator functions used by Annotated types
- types.py: Annotated field types with centralized validation
"""
