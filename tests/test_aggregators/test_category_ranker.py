"""
Unit tests for the category top-K ranker.
"""

import pytest
from src.models.rating import Movie
from src.models.views import AverageRecord
from src.aggregators.category_ranker import CategoryTopKRanker, matches_category


def test_matches_category_is_case_insensitive_substring():
    """Test substring membership, including the over-matching case."""
    assert matches_category("Comedy", "comedy|drama")
    assert matches_category("COMEDY", "Romantic Comedy")
    assert matches_category("War", "Warrior")
    assert not matches_category("Action", "Comedy|Drama")
    assert not matches_category("Action", "")


def test_comedy_scenario():
    """Test only matching movies are ranked for a category."""
    ranker = CategoryTopKRanker(categories=["Comedy"])
    averages = [AverageRecord(101, 4.0), AverageRecord(102, 4.0)]
    movies = [
        Movie(movie_id=101, title="A", genres="Comedy|Drama"),
        Movie(movie_id=102, title="B", genres="Action"),
    ]

    records = ranker.rank(averages, movies)

    assert len(records) == 1
    assert records[0].category == "Comedy"
    assert [(i.item_id, i.score) for i in records[0].top_list] == [(101, 4.0)]


def test_top_k_bound_and_order():
    """Test at most K movies, highest score first, ids unique."""
    ranker = CategoryTopKRanker(categories=["Drama"], top_k=10)
    averages = [AverageRecord(i, (i * 7) % 5 + i / 100.0) for i in range(1, 26)]
    movies = [Movie(movie_id=i, genres="Drama") for i in range(1, 26)]

    top_list = ranker.rank(averages, movies)[0].top_list
    scores = [item.score for item in top_list]
    ids = [item.item_id for item in top_list]

    assert len(top_list) == 10
    assert scores == sorted(scores, reverse=True)
    assert len(set(ids)) == len(ids)
    assert scores[0] == max(a.avg_score for a in averages)


def test_ties_broken_by_movie_id():
    ranker = CategoryTopKRanker(categories=["Horror"], top_k=3)
    averages = [AverageRecord(i, 3.5) for i in (40, 10, 30, 20)]
    movies = [Movie(movie_id=i, genres="Horror") for i in (40, 10, 30, 20)]

    top_list = ranker.rank(averages, movies)[0].top_list

    assert [item.item_id for item in top_list] == [10, 20, 30]


def test_unrated_and_unknown_movies_excluded():
    """Test inner join between averages and movie metadata."""
    ranker = CategoryTopKRanker(categories=["Action"])
    averages = [AverageRecord(1, 3.0), AverageRecord(99, 5.0)]
    movies = [
        Movie(movie_id=1, genres="Action"),
        Movie(movie_id=2, genres="Action"),  # No ratings
    ]

    records = ranker.rank(averages, movies)

    assert [i.item_id for i in records[0].top_list] == [1]


def test_empty_genres_and_unmatched_categories_omitted():
    ranker = CategoryTopKRanker(categories=["Western", "Musical", "Drama"])
    averages = [AverageRecord(1, 3.0), AverageRecord(2, 4.0)]
    movies = [
        Movie(movie_id=1, genres=""),
        Movie(movie_id=2, genres="Drama"),
    ]

    records = ranker.rank(averages, movies)

    assert [r.category for r in records] == ["Drama"]


def test_output_follows_vocabulary_order():
    ranker = CategoryTopKRanker(categories=["Sci-Fi", "Action", "Adventure"])
    averages = [AverageRecord(1, 3.0)]
    movies = [Movie(movie_id=1, genres="Action|Adventure|Sci-Fi")]

    records = ranker.rank(averages, movies)

    assert [r.category for r in records] == ["Sci-Fi", "Action", "Adventure"]


def test_substring_over_match_preserved():
    """Test that "War" ranks a movie tagged only "Warrior"."""
    ranker = CategoryTopKRanker(categories=["War"])
    records = ranker.rank(
        [AverageRecord(5, 2.0)],
        [Movie(movie_id=5, genres="Warrior")]
    )

    assert records[0].top_list[0].item_id == 5


def test_duplicate_movie_metadata_first_wins():
    ranker = CategoryTopKRanker(categories=["Comedy", "Horror"])
    records = ranker.rank(
        [AverageRecord(1, 4.0)],
        [Movie(movie_id=1, genres="Comedy"), Movie(movie_id=1, genres="Horror")]
    )

    assert [r.category for r in records] == ["Comedy"]


def test_matches_full_cross_product():
    """Test indexed ranking equals the naive category x movie filter."""
    categories = ["Action", "Drama", "War", "Children", "Film-Noir"]
    genre_pool = [
        "Action|Drama", "drama", "Warrior|Action", "Children's|Comedy",
        "Film-Noir|Thriller", "", "Documentary",
    ]
    averages = [AverageRecord(i, (i * 13 % 17) / 4.0) for i in range(60)]
    movies = [Movie(movie_id=i, genres=genre_pool[i % len(genre_pool)]) for i in range(60)]
    genres_by_id = {m.movie_id: m.genres for m in movies}

    records = CategoryTopKRanker(categories=categories, top_k=10).rank(averages, movies)
    result = {r.category: [(i.item_id, i.score) for i in r.top_list] for r in records}

    expected = {}
    for category in categories:
        pairs = [
            (a.item_id, a.avg_score) for a in averages
            if category.lower() in genres_by_id[a.item_id].lower()
        ]
        if pairs:
            expected[category] = sorted(pairs, key=lambda p: (-p[1], p[0]))[:10]

    assert result == expected


def test_invalid_top_k():
    with pytest.raises(ValueError):
        CategoryTopKRanker(categories=["Drama"], top_k=0)


def test_to_dict_shape():
    records = CategoryTopKRanker(categories=["Drama"]).rank(
        [AverageRecord(3, 4.5)],
        [Movie(movie_id=3, genres="Drama")]
    )

    assert records[0].to_dict() == {
        "category": "Drama",
        "topList": [{"itemId": 3, "score": 4.5}],
    }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
