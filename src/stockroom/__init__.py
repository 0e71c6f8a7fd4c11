"""Stockroom - product catalogue API.

CRUD over a products collection with search, filtering, sorting,
pagination and aggregate statistics.
"""

__version__ = "0.1.0"

from stockroom.infrastructure.api.app import app, create_app

__all__ = ["app", "create_app", "__version__"]
