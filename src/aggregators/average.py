"""
Average Rating Aggregator.

Mean score per movie over all of its ratings.
"""

import logging
from typing import List

from src.aggregators.frames import RatingsInput, ratings_frame
from src.models.views import AverageRecord

logger = logging.getLogger(__name__)


class AverageRatingAggregator:
    """
    Computes the arithmetic mean score per movie.

    Reduces each group to (sum, count, min, max) partials, which merge
    associatively across partitions, then divides. No rounding is applied.
    """

    def aggregate(self, ratings: RatingsInput) -> List[AverageRecord]:
        """
        Average the scores of every rated movie.

        Args:
            ratings: Rating records or a frame from ratings_frame()

        Returns:
            One AverageRecord per movie with at least one rating,
            ordered by movie id
        """
        df = ratings_frame(ratings)
        if df.empty:
            logger.info("No ratings to average, average view is empty")
            return []

        partials = df.groupby("item_id")["score"].agg(["sum", "count", "min", "max"])
        means = partials["sum"] / partials["count"]
        # Accumulated rounding error must not push a mean outside its scores
        means = means.clip(lower=partials["min"], upper=partials["max"])

        records = [
            AverageRecord(item_id=int(item_id), avg_score=float(mean))
            for item_id, mean in means.sort_index().items()
        ]

        logger.info(f"Averaged scores for {len(records)} movies")
        return records
