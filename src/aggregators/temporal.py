"""
Temporal Popularity Aggregator.

Counts ratings per movie per UTC calendar month (YYYYMM buckets).
"""

import logging
from typing import List

import pandas as pd

from src.aggregators.frames import RatingsInput, ratings_frame
from src.models.views import TemporalPopularityRecord
from src.utils.errors import InvalidTimestampError

logger = logging.getLogger(__name__)

# Range of epoch seconds pandas can represent as a datetime
MIN_TIMESTAMP_SEC = pd.Timestamp.min.value // 10**9 + 1
MAX_TIMESTAMP_SEC = pd.Timestamp.max.value // 10**9


def _to_utc_datetimes(timestamps: pd.Series) -> pd.Series:
    """
    Convert epoch seconds to UTC datetimes.

    Raises:
        InvalidTimestampError: On the first value that is not a number or
            falls outside the representable date range
    """
    numeric = pd.to_numeric(timestamps, errors="coerce")

    missing = numeric.isna()
    if missing.any():
        raise InvalidTimestampError(timestamps[missing].iloc[0], "not a number")

    out_of_range = (numeric < MIN_TIMESTAMP_SEC) | (numeric > MAX_TIMESTAMP_SEC)
    if out_of_range.any():
        raise InvalidTimestampError(
            timestamps[out_of_range].iloc[0], "outside representable date range"
        )

    try:
        return pd.to_datetime(numeric, unit="s", utc=True)
    except (OverflowError, ValueError) as e:
        raise InvalidTimestampError(None, str(e)) from e


def to_year_month(timestamp_sec) -> int:
    """
    Encode the UTC calendar month of an epoch timestamp as YYYYMM.

    >>> to_year_month(1577836800)
    202001
    """
    moment = _to_utc_datetimes(pd.Series([timestamp_sec], dtype=object)).iloc[0]
    return moment.year * 100 + moment.month


class TemporalAggregator:
    """
    Counts ratings per (month, movie).

    Ordered by month ascending, then count descending, then movie id
    ascending. A single bad timestamp aborts the whole aggregation.
    """

    def aggregate(self, ratings: RatingsInput) -> List[TemporalPopularityRecord]:
        """
        Count ratings per movie per calendar month.

        Args:
            ratings: Rating records or a frame from ratings_frame()

        Returns:
            One TemporalPopularityRecord per distinct (movie, month)

        Raises:
            InvalidTimestampError: If any timestamp is not a valid date
        """
        df = ratings_frame(ratings)
        if df.empty:
            logger.info("No ratings to bucket, recent popularity view is empty")
            return []

        moments = _to_utc_datetimes(df["timestamp_sec"])
        year_month = moments.dt.year * 100 + moments.dt.month

        counts = (
            df.assign(year_month=year_month.to_numpy())
            .groupby(["year_month", "item_id"])
            .size()
            .reset_index(name="rating_count")
            .sort_values(
                ["year_month", "rating_count", "item_id"],
                ascending=[True, False, True],
                kind="mergesort",
            )
        )

        records = [
            TemporalPopularityRecord(
                item_id=int(row.item_id),
                count=int(row.rating_count),
                year_month=int(row.year_month),
            )
            for row in counts.itertuples(index=False)
        ]

        logger.info(
            f"Bucketed {len(df)} ratings into {len(records)} movie-month pairs "
            f"({counts['year_month'].nunique()} months)"
        )
        return records
