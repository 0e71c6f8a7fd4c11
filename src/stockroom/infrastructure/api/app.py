"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
and lifecycle handlers.
"""

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from stockroom.core.config import Settings, get_settings
from stockroom.core.errors import Failure
from stockroom.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from stockroom.domain.entities.product import SAMPLE_PRODUCTS
from stockroom.domain.services import QueryEngine, product_query_spec
from stockroom.infrastructure.api.responses import failure_response
from stockroom.infrastructure.persistence.repositories import (
    InMemoryProductRepository,
    ProductRepository,
)

logger = get_logger(__name__)

ROUTE_NOT_FOUND_MESSAGE = "Route not found"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events for the application.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings: Settings = app.state.settings

    configure_logging(settings)

    logger.info(
        "Starting Stockroom",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        products=len(app.state.product_repository.snapshot()),
    )
    if not settings.api_key:
        logger.warning("No API key configured; create, update and delete will be rejected")

    yield

    logger.info("Shutting down Stockroom")


def create_app(
    settings: Settings | None = None,
    repository: ProductRepository | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the cached environment settings.
        repository: Product storage. Defaults to an in-memory repository,
            seeded with the sample catalogue when enabled in settings.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Product catalogue API with search, filtering and statistics",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    if repository is None:
        repository = InMemoryProductRepository(
            SAMPLE_PRODUCTS if settings.seed_sample_products else ()
        )

    # Shared state for the route dependencies
    app.state.settings = settings
    app.state.product_repository = repository
    app.state.query_engine = QueryEngine(
        product_query_spec(
            default_page_size=settings.default_page_size,
            max_page_size=settings.max_page_size,
        )
    )
    app.state.started_at = time.monotonic()

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_root(app)
    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_root(app: FastAPI) -> None:
    """Register the welcome endpoint.

    Args:
        app: FastAPI application instance.
    """
    prefix = app.state.settings.api_prefix

    @app.get("/", tags=["root"])
    async def root():
        """List the main endpoints."""
        return {
            "message": f"Welcome to the {app.state.settings.app_name} API!",
            "endpoints": {
                "products": f"{prefix}/products",
                "health": f"{prefix}/health",
                "stats": f"{prefix}/products/stats",
            },
        }


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints.

    Args:
        app: FastAPI application instance.
    """

    @app.get(f"{app.state.settings.api_prefix}/health", tags=["health"])
    async def health_check():
        """Basic health check endpoint.

        Returns 200 if the service is running.
        """
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": time.monotonic() - app.state.started_at,
        }


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from stockroom.infrastructure.api.routes import products_router

    settings: Settings = app.state.settings

    app.include_router(
        products_router, prefix=f"{settings.api_prefix}/products", tags=["products"]
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Everything that escapes a route is rendered in the failure envelope.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle unknown routes and other framework HTTP errors."""
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return failure_response(Failure.not_found(ROUTE_NOT_FOUND_MESSAGE))

        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Handle malformed path or query parameters."""
        messages = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return failure_response(
            Failure.validation_failed(messages or ["Invalid request"])
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        message = str(exc) if app.state.settings.debug else Failure.internal().message
        return failure_response(Failure.internal(message))


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def correlation_middleware(request, call_next):
        """Bind a correlation ID to the request and log its completion."""
        correlation_id = request.headers.get("X-Correlation-ID") or new_correlation_id()
        bind_correlation_id(correlation_id)

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            # Clear context to prevent leakage
            clear_context()


# Create the application instance
app = create_app()
