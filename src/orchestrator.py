"""
Pipeline Orchestrator.

Coordinates one full batch run: load inputs, compute all views, write
them to the result sink.
"""

import logging
from datetime import datetime
from typing import Dict, List

from src.aggregators.average import AverageRatingAggregator
from src.aggregators.category_ranker import CategoryTopKRanker
from src.aggregators.frames import ratings_frame
from src.aggregators.popularity import PopularityAggregator
from src.aggregators.temporal import TemporalAggregator
from src.models.pipeline_config import PipelineConfig

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """
    Orchestrates the batch recomputation of every view.

    Coordinates:
    1. Load ratings and movies → 2. Popularity → 3. Temporal popularity
    → 4. Average rating → 5. Category top-K → 6. Write all views

    Every view is computed before anything is written, so a failure in
    any stage leaves the previous run's outputs untouched.
    """

    def __init__(self, store, config: PipelineConfig):
        """
        Initialize pipeline orchestrator.

        Args:
            store: Record store providing load_ratings(), load_movies()
                and write_views()
            config: Category vocabulary, top-K and view names
        """
        self.store = store
        self.config = config

        self.popularity_aggregator = PopularityAggregator()
        self.temporal_aggregator = TemporalAggregator()
        self.average_aggregator = AverageRatingAggregator()
        self.category_ranker = CategoryTopKRanker(
            categories=config.categories,
            top_k=config.top_k
        )

        logger.info(
            f"Pipeline initialized: {len(config.categories)} categories, "
            f"top_k={config.top_k}"
        )

    def compute_views(self, ratings, movies) -> Dict[str, List[dict]]:
        """
        Compute all four views from an input snapshot.

        Args:
            ratings: Rating records
            movies: Movie records

        Returns:
            View name -> rows, in view declaration order

        Raises:
            InvalidTimestampError: If any rating timestamp is not a date
        """
        frame = ratings_frame(ratings)
        views = self.config.views

        popularity = self.popularity_aggregator.aggregate(frame)
        recent_popularity = self.temporal_aggregator.aggregate(frame)
        averages = self.average_aggregator.aggregate(frame)
        rankings = self.category_ranker.rank(averages, movies)

        return {
            views.popularity: [r.to_dict() for r in popularity],
            views.recent_popularity: [r.to_dict() for r in recent_popularity],
            views.average_rating: [r.to_dict() for r in averages],
            views.category_top_k: [r.to_dict() for r in rankings],
        }

    def run(self) -> Dict[str, int]:
        """
        Run the complete pipeline once.

        Returns:
            View name -> number of rows written

        Raises:
            InputValidationError: On malformed input; nothing is written
            RecordStoreError: On read or write failure
        """
        start_time = datetime.now()

        # STAGE 1: Load
        ratings = self.store.load_ratings()
        movies = self.store.load_movies()
        logger.info(f"Loaded snapshot: {len(ratings)} ratings, {len(movies)} movies")

        # STAGE 2: Aggregate
        views = self.compute_views(ratings, movies)
        row_counts = {name: len(rows) for name, rows in views.items()}

        # STAGE 3: Write
        processing_time = (datetime.now() - start_time).total_seconds()
        metadata = {
            "total_ratings": len(ratings),
            "total_movies": len(movies),
            "row_counts": row_counts,
            "categories": list(self.config.categories),
            "top_k": self.config.top_k,
            "processing_time_seconds": processing_time,
        }
        self.store.write_views(views, metadata=metadata)

        logger.info(f"Pipeline complete in {processing_time:.2f}s: {row_counts}")
        return row_counts
