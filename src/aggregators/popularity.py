"""
Popularity Aggregator.

Counts ratings per movie over the whole history.
"""

import logging
from typing import List

from src.aggregators.frames import RatingsInput, ratings_frame
from src.models.views import PopularityRecord

logger = logging.getLogger(__name__)


class PopularityAggregator:
    """
    Counts ratings per movie.

    Ordered by count descending; equal counts are ordered by movie id
    ascending so repeated runs produce identical output.
    """

    def aggregate(self, ratings: RatingsInput) -> List[PopularityRecord]:
        """
        Count ratings per movie.

        Args:
            ratings: Rating records or a frame from ratings_frame()

        Returns:
            One PopularityRecord per distinct movie id
        """
        df = ratings_frame(ratings)
        if df.empty:
            logger.info("No ratings to count, popularity view is empty")
            return []

        counts = (
            df.groupby("item_id")
            .size()
            .reset_index(name="rating_count")
            .sort_values(["rating_count", "item_id"], ascending=[False, True], kind="mergesort")
        )

        records = [
            PopularityRecord(item_id=int(row.item_id), count=int(row.rating_count))
            for row in counts.itertuples(index=False)
        ]

        logger.info(f"Counted {len(df)} ratings across {len(records)} movies")
        return records
