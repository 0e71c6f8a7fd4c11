"""Tests for the statistics aggregator."""

from stockroom.domain.entities.product import SAMPLE_PRODUCTS
from stockroom.domain.services.stats_service import CategoryStats, aggregate_stats


def test_empty_collection_has_zero_average():
    summary = aggregate_stats([])

    assert summary.total == 0
    assert summary.in_stock == 0
    assert summary.out_of_stock == 0
    assert summary.by_category == {}
    assert summary.average_price == 0
    assert summary.total_value == 0


def test_sample_catalogue():
    summary = aggregate_stats(SAMPLE_PRODUCTS)

    assert summary.total == 5
    assert summary.in_stock == 4
    assert summary.out_of_stock == 1
    assert summary.total_value == 2450
    assert summary.average_price == 490
    assert summary.by_category == {
        "electronics": CategoryStats(count=3, total_value=2150),
        "kitchen": CategoryStats(count=1, total_value=50),
        "furniture": CategoryStats(count=1, total_value=250),
    }


def test_categories_in_first_seen_order():
    snapshot = [
        {"price": 1, "category": "b", "inStock": True},
        {"price": 2, "category": "a", "inStock": False},
        {"price": 3, "category": "b", "inStock": True},
    ]

    summary = aggregate_stats(snapshot)

    assert list(summary.by_category) == ["b", "a"]
    assert summary.by_category["b"].total_value == 4


def test_missing_availability_counts_as_out_of_stock():
    summary = aggregate_stats([{"price": 10, "category": "x"}])
    assert summary.in_stock == 0
    assert summary.out_of_stock == 1
