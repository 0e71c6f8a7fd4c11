"""API Routes for Stockroom."""

from .products_router import router as products_router

__all__ = [
    "products_router",
]
