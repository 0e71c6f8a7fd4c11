"""FastAPI dependencies for Stockroom routes.

Provides access to the settings, repository and query engine stored on
the application state by the app factory.
"""

from typing import Annotated

from fastapi import Depends, Request

from stockroom.core.config import Settings
from stockroom.domain.services import QueryEngine
from stockroom.infrastructure.persistence.repositories import ProductRepository


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_product_repository(request: Request) -> ProductRepository:
    """Get the product repository from app state."""
    return request.app.state.product_repository


def get_query_engine(request: Request) -> QueryEngine:
    """Get the products query engine from app state."""
    return request.app.state.query_engine


# Type aliases for dependency injection
AppSettings = Annotated[Settings, Depends(get_app_settings)]
Repository = Annotated[ProductRepository, Depends(get_product_repository)]
Engine = Annotated[QueryEngine, Depends(get_query_engine)]
