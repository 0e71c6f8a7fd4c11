"""Products API routes.

Each endpoint builds a ``RequestContext`` and runs it through the
request pipeline for its route kind. The ``handle_*`` functions are the
resource handlers the pipeline ends in; they only touch storage through
the ``ProductRepository`` interface.
"""

import json
from functools import partial
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from stockroom.core.errors import Failure
from stockroom.core.logging import get_logger
from stockroom.domain.entities.product import DEFAULT_IN_STOCK
from stockroom.domain.services import QueryEngine, aggregate_stats
from stockroom.infrastructure.api.dependencies import AppSettings, Engine, Repository
from stockroom.infrastructure.api.middleware import (
    ChainState,
    Handler,
    HandlerResult,
    RequestContext,
    RouteKind,
    build_chain,
)
from stockroom.infrastructure.api.responses import render_outcome
from stockroom.infrastructure.api.schemas import StatsSchema
from stockroom.infrastructure.persistence.repositories import ProductRepository

logger = get_logger(__name__)

router = APIRouter()

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"description": "Validation error"},
    401: {"description": "Missing or invalid API key"},
    404: {"description": "Product not found"},
}


def _not_found(product_id: str) -> Failure:
    return Failure.not_found(f"Product with ID {product_id} not found")


def handle_list_products(
    context: RequestContext,
    repository: ProductRepository,
    engine: QueryEngine,
) -> HandlerResult:
    """List products with search, filters, sorting and pagination."""
    # One snapshot for both the page and the counts
    snapshot = repository.snapshot()
    result = engine.run(snapshot, context.query_params)
    return HandlerResult(data=list(result.items), pagination=result.pagination)


def handle_product_stats(
    context: RequestContext,
    repository: ProductRepository,
) -> HandlerResult:
    """Aggregate statistics over the whole collection."""
    summary = aggregate_stats(repository.snapshot())
    return HandlerResult(data=StatsSchema.from_summary(summary).model_dump(by_alias=True))


def handle_get_product(
    context: RequestContext,
    repository: ProductRepository,
) -> HandlerResult | Failure:
    """Get a single product by ID."""
    product_id = context.path_params["product_id"]
    product = repository.get(product_id)
    if product is None:
        return _not_found(product_id)
    return HandlerResult(data=product)


def handle_create_product(
    context: RequestContext,
    repository: ProductRepository,
) -> HandlerResult:
    """Insert the validated body as a new product."""
    data = dict(context.validated or {})
    data.setdefault("inStock", DEFAULT_IN_STOCK)

    created = repository.insert(data)
    logger.info("Product created successfully", product_id=created["id"])
    return HandlerResult(
        data=created,
        status_code=status.HTTP_201_CREATED,
        message="Product created successfully",
    )


def handle_update_product(
    context: RequestContext,
    repository: ProductRepository,
) -> HandlerResult | Failure:
    """Merge the validated body into the stored product.

    Fields absent from the body keep their stored values.
    """
    product_id = context.path_params["product_id"]
    current = repository.get(product_id)
    if current is None:
        return _not_found(product_id)

    merged = {**current, **(context.validated or {})}
    updated = repository.replace(product_id, merged)
    if updated is None:
        # Deleted between the read and the write
        return _not_found(product_id)

    logger.info("Product updated successfully", product_id=product_id)
    return HandlerResult(data=updated, message="Product updated successfully")


def handle_delete_product(
    context: RequestContext,
    repository: ProductRepository,
) -> HandlerResult | Failure:
    """Delete a product and return it."""
    product_id = context.path_params["product_id"]
    removed = repository.delete(product_id)
    if removed is None:
        return _not_found(product_id)

    logger.info("Product deleted successfully", product_id=product_id)
    return HandlerResult(data=removed, message="Product deleted successfully")


async def build_request_context(request: Request, read_body: bool = False) -> RequestContext:
    """Capture the parts of a request the pipeline needs.

    A body that is empty or not valid JSON is passed on as None so the
    validation stage reports it; authentication still runs first.
    """
    body: Any = None
    if read_body:
        raw = await request.body()
        if raw:
            try:
                body = json.loads(raw)
            except ValueError:
                body = None

    return RequestContext(
        method=request.method,
        path=request.url.path,
        headers={key.lower(): value for key, value in request.headers.items()},
        query_params=dict(request.query_params),
        path_params=dict(request.path_params),
        body=body,
    )


def _dispatch(
    kind: RouteKind,
    settings: AppSettings,
    context: RequestContext,
    handler: Handler,
) -> JSONResponse:
    outcome = build_chain(kind, settings).run(context, handler)
    if outcome.state == ChainState.HALTED and outcome.failure is not None:
        logger.info(
            "Request halted",
            route=kind.value,
            path=context.path,
            status_code=outcome.failure.status_code,
            error=outcome.failure.message,
        )
    return render_outcome(outcome)


@router.get("", response_model=None)
async def list_products(
    request: Request,
    settings: AppSettings,
    repository: Repository,
    engine: Engine,
) -> JSONResponse:
    """List products.

    Query parameters: search, category, inStock, minPrice, maxPrice,
    sortBy, order (asc|desc), page, limit. ``limit`` is capped at the
    configured maximum page size (100 by default); the pagination block
    reports the limit actually applied.
    """
    context = await build_request_context(request)
    handler = partial(handle_list_products, repository=repository, engine=engine)
    return _dispatch(RouteKind.LIST, settings, context, handler)


@router.get("/stats", response_model=None)
async def product_stats(
    request: Request,
    settings: AppSettings,
    repository: Repository,
) -> JSONResponse:
    """Get product statistics."""
    context = await build_request_context(request)
    handler = partial(handle_product_stats, repository=repository)
    return _dispatch(RouteKind.STATS, settings, context, handler)


@router.get("/{product_id}", response_model=None, responses={404: _ERROR_RESPONSES[404]})
async def get_product(
    request: Request,
    product_id: str,
    settings: AppSettings,
    repository: Repository,
) -> JSONResponse:
    """Get a single product by ID."""
    context = await build_request_context(request)
    handler = partial(handle_get_product, repository=repository)
    return _dispatch(RouteKind.READ, settings, context, handler)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=None,
    responses={code: _ERROR_RESPONSES[code] for code in (400, 401)},
)
async def create_product(
    request: Request,
    settings: AppSettings,
    repository: Repository,
) -> JSONResponse:
    """Create a product. Requires the API key header."""
    context = await build_request_context(request, read_body=True)
    handler = partial(handle_create_product, repository=repository)
    return _dispatch(RouteKind.CREATE, settings, context, handler)


@router.put("/{product_id}", response_model=None, responses=_ERROR_RESPONSES)
async def update_product(
    request: Request,
    product_id: str,
    settings: AppSettings,
    repository: Repository,
) -> JSONResponse:
    """Update a product. Omitted fields keep their values. Requires the API key header."""
    context = await build_request_context(request, read_body=True)
    handler = partial(handle_update_product, repository=repository)
    return _dispatch(RouteKind.UPDATE, settings, context, handler)


@router.delete(
    "/{product_id}",
    response_model=None,
    responses={code: _ERROR_RESPONSES[code] for code in (401, 404)},
)
async def delete_product(
    request: Request,
    product_id: str,
    settings: AppSettings,
    repository: Repository,
) -> JSONResponse:
    """Delete a product. Requires the API key header."""
    context = await build_request_context(request)
    handler = partial(handle_delete_product, repository=repository)
    return _dispatch(RouteKind.DELETE, settings, context, handler)
