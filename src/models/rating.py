"""
Input data models.

Ratings and movie metadata as read from the record store.
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional

DEFAULT_RATING_FIELDS = {
    "user_id": "userId",
    "item_id": "itemId",
    "score": "score",
    "timestamp_sec": "timestampSec",
}

DEFAULT_MOVIE_FIELDS = {
    "movie_id": "id",
    "title": "name",
    "genres": "categoryField",
}


@dataclass(frozen=True)
class Rating:
    """
    One user rating event.
    Duplicates (same user, item and time) are kept as separate events.
    """
    user_id: int
    item_id: int
    score: float
    timestamp_sec: int  # Unix epoch seconds, UTC

    def __post_init__(self):
        # Validate score
        if not isinstance(self.score, (int, float)) or not math.isfinite(self.score):
            raise ValueError(f"Invalid score: {self.score!r}. Must be a finite number")

    @classmethod
    def from_dict(cls, data: dict, field_map: Optional[Dict[str, str]] = None) -> "Rating":
        """Create Rating from a store document."""
        fields = field_map or DEFAULT_RATING_FIELDS
        return cls(
            user_id=int(data[fields["user_id"]]),
            item_id=int(data[fields["item_id"]]),
            score=float(data[fields["score"]]),
            # Left unconverted; the temporal aggregator owns timestamp validation
            timestamp_sec=data.get(fields["timestamp_sec"]),
        )

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "itemId": self.item_id,
            "score": self.score,
            "timestampSec": self.timestamp_sec,
        }


@dataclass(frozen=True)
class Movie:
    """
    Item metadata. Only the genres field takes part in aggregation.
    """
    movie_id: int
    title: str = ""
    genres: str = ""  # Free text, e.g. "Adventure|Children|Fantasy"

    def __post_init__(self):
        # Missing genres behave like an empty field
        if self.genres is None:
            object.__setattr__(self, "genres", "")

    @classmethod
    def from_dict(cls, data: dict, field_map: Optional[Dict[str, str]] = None) -> "Movie":
        """Create Movie from a store document."""
        fields = field_map or DEFAULT_MOVIE_FIELDS
        title = data.get(fields["title"])
        genres = data.get(fields["genres"])
        return cls(
            movie_id=int(data[fields["movie_id"]]),
            title=title if isinstance(title, str) else "",
            genres=genres if isinstance(genres, str) else "",
        )

    def to_dict(self) -> dict:
        return {
            "id": self.movie_id,
            "name": self.title,
            "categoryField": self.genres,
        }
