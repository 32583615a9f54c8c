"""
Unit tests for the popularity aggregator.
"""

import pytest
from src.models.rating import Rating
from src.aggregators.popularity import PopularityAggregator


@pytest.fixture
def sample_ratings():
    """Three ratings across two movies in Jan and Feb 2020."""
    return [
        Rating(user_id=1, item_id=101, score=5.0, timestamp_sec=1577836800),
        Rating(user_id=2, item_id=101, score=3.0, timestamp_sec=1577836800),
        Rating(user_id=1, item_id=102, score=4.0, timestamp_sec=1580515200),
    ]


def test_popularity_counts(sample_ratings):
    """Test ratings are counted per movie."""
    records = PopularityAggregator().aggregate(sample_ratings)

    counts = {r.item_id: r.count for r in records}
    assert counts == {101: 2, 102: 1}


def test_popularity_sum_equals_total(sample_ratings):
    """Test that counts add up to the number of ratings."""
    ratings = sample_ratings + [
        Rating(user_id=3, item_id=103, score=2.5, timestamp_sec=1590000000),
        Rating(user_id=3, item_id=101, score=1.0, timestamp_sec=1590000000),
    ]
    records = PopularityAggregator().aggregate(ratings)

    assert sum(r.count for r in records) == len(ratings)


def test_popularity_order_with_ties():
    """Test count descending, then movie id ascending."""
    ratings = [
        Rating(user_id=1, item_id=7, score=3.0, timestamp_sec=0),
        Rating(user_id=1, item_id=3, score=3.0, timestamp_sec=0),
        Rating(user_id=2, item_id=5, score=3.0, timestamp_sec=0),
        Rating(user_id=3, item_id=5, score=3.0, timestamp_sec=0),
    ]
    records = PopularityAggregator().aggregate(ratings)

    assert [(r.item_id, r.count) for r in records] == [(5, 2), (3, 1), (7, 1)]


def test_popularity_keeps_duplicate_events():
    """Test identical user/movie/time events are all counted."""
    rating = Rating(user_id=1, item_id=9, score=4.0, timestamp_sec=1000)
    records = PopularityAggregator().aggregate([rating, rating])

    assert records[0].count == 2


def test_popularity_empty_input():
    assert PopularityAggregator().aggregate([]) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
