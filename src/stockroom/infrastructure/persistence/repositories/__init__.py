"""Persistence repositories for product storage."""

from stockroom.infrastructure.persistence.repositories.product_repository import (
    InMemoryProductRepository,
    ProductRepository,
)

__all__ = [
    "InMemoryProductRepository",
    "ProductRepository",
]
