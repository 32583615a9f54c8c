"""
Tabular helpers shared by the aggregators.
"""

from typing import Iterable, Union

import pandas as pd

from src.models.rating import Rating

RATING_COLUMNS = ["user_id", "item_id", "score", "timestamp_sec"]

RatingsInput = Union[pd.DataFrame, Iterable[Rating]]


def ratings_frame(ratings: RatingsInput) -> pd.DataFrame:
    """
    Build a DataFrame with one row per rating.

    A DataFrame is passed through untouched so the orchestrator can build
    the frame once and share it between aggregators.
    """
    if isinstance(ratings, pd.DataFrame):
        return ratings

    rows = [
        (r.user_id, r.item_id, r.score, r.timestamp_sec)
        for r in ratings
    ]
    return pd.DataFrame(rows, columns=RATING_COLUMNS)
