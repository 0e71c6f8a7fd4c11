"""Pydantic schemas for the response envelopes.

Every response is wrapped in ``{"success": ..., ...}``. Field names are
snake_case in Python and camelCase on the wire.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stockroom.domain.services.query_engine import PageMetadata
from stockroom.domain.services.stats_service import StatsSummary


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationSchema(CamelModel):
    """Pagination block of a listing response."""

    current_page: int = Field(..., description="Requested page (1-based)")
    total_pages: int = Field(..., description="Number of pages for the filtered result")
    total_products: int = Field(..., description="Products matching the filters")
    limit: int = Field(..., description="Page size")
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def from_metadata(cls, metadata: PageMetadata) -> "PaginationSchema":
        return cls(
            current_page=metadata.current_page,
            total_pages=metadata.total_pages,
            total_products=metadata.total_matching,
            limit=metadata.limit,
            has_next_page=metadata.has_next_page,
            has_prev_page=metadata.has_prev_page,
        )


class CategoryStatsSchema(CamelModel):
    """Per-category statistics."""

    count: int
    total_value: float


class StatsSchema(CamelModel):
    """Statistics over the whole products collection."""

    total_products: int
    in_stock: int
    out_of_stock: int
    by_category: dict[str, CategoryStatsSchema]
    average_price: float
    total_value: float

    @classmethod
    def from_summary(cls, summary: StatsSummary) -> "StatsSchema":
        return cls(
            total_products=summary.total,
            in_stock=summary.in_stock,
            out_of_stock=summary.out_of_stock,
            by_category={
                str(name): CategoryStatsSchema(
                    count=bucket.count, total_value=bucket.total_value
                )
                for name, bucket in summary.by_category.items()
            },
            average_price=summary.average_price,
            total_value=summary.total_value,
        )


class SuccessResponse(CamelModel):
    """Success envelope."""

    success: Literal[True] = True
    data: Any = Field(..., description="Response payload")
    message: str | None = Field(None, description="Outcome of a mutating request")
    pagination: PaginationSchema | None = Field(None, description="Present on listings")

    def to_content(self) -> dict[str, Any]:
        """Serialize, leaving out optional blocks that are not set."""
        content = self.model_dump(by_alias=True)
        for key in ("message", "pagination"):
            if content.get(key) is None:
                content.pop(key, None)
        return content


class FailureResponse(CamelModel):
    """Failure envelope."""

    success: Literal[False] = False
    error: str = Field(..., description="Human-readable error message")
