"""
Domain Layer
============

Core business logic and domain models.
This layer has no dependencies on external frameworks or infrastructure.

Contains:
- Models: User, Book, Loan with their validation and state transitions
- Exceptions: Typed domain errors raised by models and use cases
- Repository Interfaces: Abstract contracts for data access
"""
