"""
Application Layer
=================

Application services and use cases.
This layer orchestrates domain entities and repositories.

Contains:
- Use Cases: Business operations (create user, borrow book, return book, ...)
- Services: Application services that coordinate multiple use cases
- DTOs: Pydantic request/response models for the HTTP layer
"""
