"""Request pipeline package."""

from stockroom.infrastructure.api.middleware.request_pipeline import (
    ChainOutcome,
    ChainState,
    Handler,
    HandlerResult,
    MiddlewareChain,
    RequestContext,
    RouteKind,
    build_chain,
    log_request,
    require_api_key,
    validate_body,
)

__all__ = [
    "ChainOutcome",
    "ChainState",
    "Handler",
    "HandlerResult",
    "MiddlewareChain",
    "RequestContext",
    "RouteKind",
    "build_chain",
    "log_request",
    "require_api_key",
    "validate_body",
]
