"""Domain services for Stockroom.

Services contain business logic that doesn't naturally fit within a single entity.
They have no dependencies on infrastructure or external frameworks.
"""

from stockroom.domain.services.query_engine import (
    PageMetadata,
    QueryEngine,
    QueryResult,
    QuerySpec,
    RangeFilter,
    product_query_spec,
)
from stockroom.domain.services.record_validator import (
    RecordValidationError,
    RecordValidator,
    ValidationResult,
)
from stockroom.domain.services.stats_service import (
    CategoryStats,
    StatsSummary,
    aggregate_stats,
)

__all__ = [
    "CategoryStats",
    "PageMetadata",
    "QueryEngine",
    "QueryResult",
    "QuerySpec",
    "RangeFilter",
    "RecordValidationError",
    "RecordValidator",
    "StatsSummary",
    "ValidationResult",
    "aggregate_stats",
    "product_query_spec",
]
