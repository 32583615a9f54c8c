"""
Pipeline configuration model.

Explicit, immutable configuration handed to the orchestrator instead of
process-wide constants.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

import config.settings as settings


@dataclass(frozen=True)
class ViewNames:
    """Names of the four output views in the result sink."""
    popularity: str = "popular_movies"
    recent_popularity: str = "recent_popular_movies"
    average_rating: str = "average_movies_score"
    category_top_k: str = "genre_top_movies"

    def all(self) -> Tuple[str, ...]:
        return (
            self.popularity,
            self.recent_popularity,
            self.average_rating,
            self.category_top_k,
        )

    def __post_init__(self):
        if len(set(self.all())) != 4:
            raise ValueError(f"View names must be distinct: {self.all()}")


@dataclass(frozen=True)
class PipelineConfig:
    """
    Everything that shapes one pipeline run.

    categories: Category vocabulary, ranked in this order
    top_k: Maximum items per category ranking
    views: Output view names
    """
    categories: Tuple[str, ...]
    top_k: int = 10
    views: ViewNames = field(default_factory=ViewNames)

    def __post_init__(self):
        # Accept any sequence, store a tuple
        object.__setattr__(self, "categories", tuple(self.categories))
        if self.top_k < 1:
            raise ValueError(f"Invalid top_k: {self.top_k}. Must be >= 1")

    @classmethod
    def from_settings(cls, **overrides) -> "PipelineConfig":
        """Build config from config.settings, with optional overrides."""
        values: Dict = {
            "categories": tuple(settings.CATEGORY_VOCABULARY),
            "top_k": settings.TOP_K,
            "views": ViewNames(
                popularity=settings.POPULARITY_VIEW,
                recent_popularity=settings.RECENT_POPULARITY_VIEW,
                average_rating=settings.AVERAGE_RATING_VIEW,
                category_top_k=settings.CATEGORY_TOP_K_VIEW,
            ),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
