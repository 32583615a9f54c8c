"""
Output view models.

One record type per derived view. to_dict() yields the row shape written
to the result sink.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class PopularityRecord:
    """Number of ratings an item received over all time."""
    item_id: int
    count: int

    def to_dict(self) -> dict:
        return {"itemId": self.item_id, "count": self.count}


@dataclass(frozen=True)
class TemporalPopularityRecord:
    """Number of ratings an item received in one UTC calendar month."""
    item_id: int
    count: int
    year_month: int  # YYYYMM

    def to_dict(self) -> dict:
        return {
            "itemId": self.item_id,
            "count": self.count,
            "yearMonth": self.year_month,
        }


@dataclass(frozen=True)
class AverageRecord:
    """Mean score over all ratings of an item."""
    item_id: int
    avg_score: float

    def to_dict(self) -> dict:
        return {"itemId": self.item_id, "avgScore": self.avg_score}


@dataclass(frozen=True)
class RankedItem:
    item_id: int
    score: float

    def to_dict(self) -> dict:
        return {"itemId": self.item_id, "score": self.score}


@dataclass(frozen=True)
class CategoryTopKRecord:
    """
    Best-rated items of one category, highest average first.
    """
    category: str
    top_list: Tuple[RankedItem, ...]

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "topList": [item.to_dict() for item in self.top_list],
        }
