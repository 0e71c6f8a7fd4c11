"""Statistics aggregation over a collection snapshot.

Stats are recomputed for every request from the snapshot handed in;
nothing is cached.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from stockroom.domain.entities.product import Record


@dataclass
class CategoryStats:
    """Per-category count and summed value."""

    count: int = 0
    total_value: float = 0


@dataclass(frozen=True)
class StatsSummary:
    """Summary of a collection snapshot.

    ``by_category`` preserves the order in which categories first appear
    in the snapshot.
    """

    total: int
    in_stock: int
    out_of_stock: int
    by_category: dict[str, CategoryStats] = field(default_factory=dict)
    average_price: float = 0
    total_value: float = 0


def aggregate_stats(
    snapshot: Sequence[Record],
    category_field: str = "category",
    value_field: str = "price",
    availability_field: str = "inStock",
) -> StatsSummary:
    """Compute counts and price aggregates for a snapshot.

    Args:
        snapshot: Point-in-time view of the collection.
        category_field: Field grouping records into categories.
        value_field: Numeric field summed and averaged.
        availability_field: Boolean field splitting in/out of stock.

    Returns:
        StatsSummary. ``average_price`` is 0 for an empty snapshot.
    """
    by_category: dict[str, CategoryStats] = {}
    in_stock = 0
    total_value: float = 0

    for record in snapshot:
        value = record.get(value_field) or 0
        total_value += value

        if record.get(availability_field):
            in_stock += 1

        bucket = by_category.setdefault(record.get(category_field), CategoryStats())
        bucket.count += 1
        bucket.total_value += value

    total = len(snapshot)
    return StatsSummary(
        total=total,
        in_stock=in_stock,
        out_of_stock=total - in_stock,
        by_category=by_category,
        average_price=total_value / total if total else 0,
        total_value=total_value,
    )
