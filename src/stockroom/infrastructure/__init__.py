"""Infrastructure layer - External dependencies and implementations.

This layer contains all external dependencies including:
- API routes, schemas and request pipeline (FastAPI)
- API key authentication
- In-memory product storage

The infrastructure layer implements interfaces defined in the
domain layer.
"""
