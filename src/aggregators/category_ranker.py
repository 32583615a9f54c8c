"""
Category Top-K Ranker.

Ranks the best-rated movies of every category in a fixed vocabulary.
"""

import heapq
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Sequence, Tuple

from src.models.rating import Movie
from src.models.views import AverageRecord, CategoryTopKRecord, RankedItem

logger = logging.getLogger(__name__)


def matches_category(category: str, genres: str) -> bool:
    """
    Case-insensitive substring match of a category name in a genres field.

    Substring, not token equality: "War" also matches "Warrior".
    """
    if not category or not genres:
        return False
    return category.lower() in genres.lower()


class CategoryTopKRanker:
    """
    Selects the top-K movies by average score for each category.

    Membership is a substring test on the lower-cased genres field.
    Movies are grouped by their distinct genres string first, so the
    predicate runs once per (category, distinct string) instead of once
    per (category, movie); the result equals the full cross product.
    """

    def __init__(self, categories: Sequence[str], top_k: int = 10):
        """
        Initialize ranker.

        Args:
            categories: Category vocabulary; output follows this order
            top_k: Maximum movies per category
        """
        if top_k < 1:
            raise ValueError(f"Invalid top_k: {top_k}. Must be >= 1")

        self.categories = list(categories)
        self.top_k = top_k

    def rank(
        self,
        averages: Iterable[AverageRecord],
        movies: Iterable[Movie]
    ) -> List[CategoryTopKRecord]:
        """
        Build one ranking per category that has at least one matching movie.

        Args:
            averages: Output of AverageRatingAggregator
            movies: Movie metadata

        Returns:
            CategoryTopKRecords in vocabulary order, each sorted by score
            descending then movie id ascending
        """
        index = self._build_genre_index(averages, movies)
        logger.debug(f"Genre index holds {len(index)} distinct genre strings")

        records = []
        for category in self.categories:
            candidates = self._candidates(category, index)
            if not candidates:
                logger.debug(f"No movies match category '{category}'")
                continue

            best = heapq.nsmallest(
                self.top_k,
                candidates,
                key=lambda pair: (-pair[1], pair[0])
            )
            records.append(
                CategoryTopKRecord(
                    category=category,
                    top_list=tuple(RankedItem(item_id, score) for item_id, score in best)
                )
            )

        logger.info(
            f"Ranked {len(records)}/{len(self.categories)} categories "
            f"(top {self.top_k} each)"
        )
        return records

    def _build_genre_index(
        self,
        averages: Iterable[AverageRecord],
        movies: Iterable[Movie]
    ) -> Dict[str, List[Tuple[int, float]]]:
        """
        Inner-join averages with movies and group by lower-cased genres.

        Returns:
            lower-cased genres -> [(movie_id, avg_score), ...]
        """
        genres_by_id: Dict[int, str] = {}
        duplicates = 0
        for movie in movies:
            if movie.movie_id in genres_by_id:
                duplicates += 1
                continue
            genres_by_id[movie.movie_id] = movie.genres or ""

        if duplicates:
            logger.warning(f"Ignored {duplicates} duplicate movie records (first wins)")

        index: Dict[str, List[Tuple[int, float]]] = defaultdict(list)
        seen = set()
        repeated = 0
        unmatched = 0
        for record in averages:
            # Item ids must stay unique within every ranking
            if record.item_id in seen:
                repeated += 1
                continue
            seen.add(record.item_id)

            genres = genres_by_id.get(record.item_id)
            if genres is None:
                unmatched += 1
                continue
            if not genres.strip():
                continue
            index[genres.lower()].append((record.item_id, record.avg_score))

        if repeated:
            logger.warning(f"Ignored {repeated} repeated average records (first wins)")
        if unmatched:
            logger.warning(f"{unmatched} rated movies have no metadata, excluded from ranking")

        return index

    @staticmethod
    def _candidates(
        category: str,
        index: Dict[str, List[Tuple[int, float]]]
    ) -> List[Tuple[int, float]]:
        """Collect all (movie_id, score) pairs whose genres contain category."""
        candidates = []
        for genres, pairs in index.items():
            if matches_category(category, genres):
                candidates.extend(pairs)
        return candidates
