"""API schemas for Stockroom."""

from stockroom.infrastructure.api.schemas.envelope_schemas import (
    CategoryStatsSchema,
    FailureResponse,
    PaginationSchema,
    StatsSchema,
    SuccessResponse,
)

__all__ = [
    "CategoryStatsSchema",
    "FailureResponse",
    "PaginationSchema",
    "StatsSchema",
    "SuccessResponse",
]
