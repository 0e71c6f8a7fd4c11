"""Query engine for listing collection records.

Turns a snapshot of the collection plus raw query parameters into one
page of records and its pagination metadata. Stages always run in the
same order: search, exact-match filters, range filters, sort, paginate.
A stage whose parameter is absent is skipped.

Read paths fail open: a malformed number or boolean in the query string
disables that one filter instead of failing the request.
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from stockroom.domain.entities.product import PRODUCT_SORT_FIELDS, Record

SEARCH_PARAM = "search"
SORT_BY_PARAM = "sortBy"
ORDER_PARAM = "order"
PAGE_PARAM = "page"
LIMIT_PARAM = "limit"

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def parse_int(raw: str | None) -> int | None:
    """Parse a base-10 integer parameter, None if absent or malformed."""
    if raw is None:
        return None
    text = raw.strip()
    # int() would also take "+3", "1_0" and non-ASCII digits
    if not (text.isascii() and text.removeprefix("-").isdigit()):
        return None
    return int(text)


def parse_float(raw: str | None) -> float | None:
    """Parse a finite number parameter, None if absent or malformed."""
    if raw is None:
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_bool(raw: str | None) -> bool | None:
    """Parse 'true'/'false' (any case), None for anything else."""
    if raw is None:
        return None
    lowered = raw.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


@dataclass(frozen=True)
class RangeFilter:
    """Inclusive numeric bounds on one field, read from two parameters."""

    field: str
    min_param: str
    max_param: str


@dataclass(frozen=True)
class QuerySpec:
    """Which fields each query stage looks at.

    Attributes:
        search_fields: Text fields matched by the search term (OR).
        text_filters: Fields filtered by case-insensitive equality; the
            query parameter has the same name as the field.
        boolean_filters: Fields filtered by exact boolean equality.
        range_filters: Numeric range filters.
        sort_fields: Fields accepted by ``sortBy``.
        default_page_size: Page size when ``limit`` is absent or invalid.
        max_page_size: Upper bound applied to ``limit``.
    """

    search_fields: tuple[str, ...] = ()
    text_filters: tuple[str, ...] = ()
    boolean_filters: tuple[str, ...] = ()
    range_filters: tuple[RangeFilter, ...] = ()
    sort_fields: frozenset[str] = field(default_factory=frozenset)
    default_page_size: int = DEFAULT_PAGE_SIZE
    max_page_size: int = MAX_PAGE_SIZE


@dataclass(frozen=True)
class PageMetadata:
    """Pagination metadata for one listing response."""

    current_page: int
    total_pages: int
    total_matching: int
    limit: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, page: int, limit: int, total_matching: int) -> "PageMetadata":
        total_pages = math.ceil(total_matching / limit) if limit > 0 else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_matching=total_matching,
            limit=limit,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )


@dataclass(frozen=True)
class QueryResult:
    """One page of records plus its metadata."""

    items: tuple[Record, ...]
    pagination: PageMetadata


class QueryEngine:
    """Runs the listing pipeline over a collection snapshot.

    The engine holds no state besides its ``QuerySpec``; the same
    snapshot and parameters always produce the same result.
    """

    def __init__(self, spec: QuerySpec) -> None:
        self.spec = spec

    def run(self, snapshot: Sequence[Record], params: Mapping[str, str]) -> QueryResult:
        """Filter, sort and paginate a snapshot.

        Args:
            snapshot: Point-in-time view of the collection.
            params: Raw query parameters; empty values count as absent.

        Returns:
            QueryResult with the requested page. ``total_matching`` is the
            number of records left after filtering, before pagination.
        """
        params = {key: value for key, value in params.items() if value != ""}

        records: list[Record] = list(snapshot)
        records = self.search(records, params.get(SEARCH_PARAM))
        records = self.apply_exact_filters(records, params)
        records = self.apply_range_filters(records, params)
        records = self.sort(records, params.get(SORT_BY_PARAM), params.get(ORDER_PARAM))

        page, limit = self.resolve_page(params.get(PAGE_PARAM), params.get(LIMIT_PARAM))
        start = (page - 1) * limit
        items = tuple(records[start : start + limit])

        return QueryResult(
            items=items,
            pagination=PageMetadata.build(page, limit, len(records)),
        )

    def search(self, records: list[Record], term: str | None) -> list[Record]:
        """Keep records where any search field contains the term, ignoring case."""
        if not term or not self.spec.search_fields:
            return records

        needle = term.lower()
        return [
            record
            for record in records
            if any(
                needle in value.lower()
                for value in _text_values(record, self.spec.search_fields)
            )
        ]

    def apply_exact_filters(
        self, records: list[Record], params: Mapping[str, str]
    ) -> list[Record]:
        """Apply every exact-match filter present in the parameters (AND)."""
        for field_name in self.spec.text_filters:
            expected = params.get(field_name)
            if expected is None:
                continue
            expected = expected.lower()
            records = [
                record
                for record in records
                if isinstance(record.get(field_name), str)
                and record[field_name].lower() == expected
            ]

        for field_name in self.spec.boolean_filters:
            expected_flag = parse_bool(params.get(field_name))
            if expected_flag is None:
                continue
            records = [record for record in records if record.get(field_name) is expected_flag]

        return records

    def apply_range_filters(
        self, records: list[Record], params: Mapping[str, str]
    ) -> list[Record]:
        """Apply inclusive numeric bounds; malformed bounds are ignored."""
        for range_filter in self.spec.range_filters:
            lower = parse_float(params.get(range_filter.min_param))
            upper = parse_float(params.get(range_filter.max_param))

            if lower is not None:
                records = [
                    record
                    for record in records
                    if _is_number(record.get(range_filter.field))
                    and record[range_filter.field] >= lower
                ]
            if upper is not None:
                records = [
                    record
                    for record in records
                    if _is_number(record.get(range_filter.field))
                    and record[range_filter.field] <= upper
                ]

        return records

    def sort(
        self, records: list[Record], sort_by: str | None, order: str | None
    ) -> list[Record]:
        """Stable sort by a known field; unknown fields keep the current order."""
        if sort_by is None or sort_by not in self.spec.sort_fields:
            return records

        descending = (order or "").strip().lower() == "desc"
        present = [record for record in records if record.get(sort_by) is not None]
        # Records missing the field go last in either order
        missing = [record for record in records if record.get(sort_by) is None]
        return (
            sorted(present, key=lambda record: record[sort_by], reverse=descending)
            + missing
        )

    def resolve_page(self, raw_page: str | None, raw_limit: str | None) -> tuple[int, int]:
        """Resolve page and page size, falling back to defaults on bad input."""
        page = parse_int(raw_page)
        if page is None or page < 1:
            page = DEFAULT_PAGE

        limit = parse_int(raw_limit)
        if limit is None or limit < 1:
            limit = self.spec.default_page_size

        return page, min(limit, self.spec.max_page_size)


def _text_values(record: Record, fields: Iterable[str]) -> Iterable[str]:
    for field_name in fields:
        value = record.get(field_name)
        if isinstance(value, str):
            yield value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def product_query_spec(
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = MAX_PAGE_SIZE,
) -> QuerySpec:
    """Query configuration for the products collection."""
    return QuerySpec(
        search_fields=("name", "description"),
        text_filters=("category",),
        boolean_filters=("inStock",),
        range_filters=(RangeFilter(field="price", min_param="minPrice", max_param="maxPrice"),),
        sort_fields=PRODUCT_SORT_FIELDS,
        default_page_size=default_page_size,
        max_page_size=max_page_size,
    )
