"""
Configuration settings for RatingViews.

Centralized configuration for the record store and the batch pipeline.
Values are read once at import time; the pipeline itself only sees them
through PipelineConfig.from_settings().
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = Path(os.getenv("RATINGVIEWS_DATA_ROOT", str(PROJECT_ROOT / "data")))
OUTPUT_ROOT = Path(os.getenv("RATINGVIEWS_OUTPUT_ROOT", str(PROJECT_ROOT / "output")))

# Record store backend: "mongo" or "file"
STORE_BACKEND = os.getenv("RATINGVIEWS_BACKEND", "mongo")

# MongoDB connection
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/")
MONGO_DATABASE = os.getenv("MONGO_DATABASE", "movielens")
MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

# Input collections (also the CSV file stems for the file backend)
RATINGS_COLLECTION = "ratings"
MOVIES_COLLECTION = "movies"

# Document field names -> record attribute names
RATING_FIELD_MAP = {
    "user_id": "userId",
    "item_id": "movieId",
    "score": "rating",
    "timestamp_sec": "timestamp",
}
MOVIE_FIELD_MAP = {
    "movie_id": "movieId",
    "title": "title",
    "genres": "genres",
}

# Output views (each fully overwritten per run)
POPULARITY_VIEW = "popular_movies"
RECENT_POPULARITY_VIEW = "recent_popular_movies"
AVERAGE_RATING_VIEW = "average_movies_score"
CATEGORY_TOP_K_VIEW = "genre_top_movies"

# Category ranking
TOP_K = 10
CATEGORY_VOCABULARY = [
    "Action",
    "Adventure",
    "Animation",
    "Children",
    "Comedy",
    "Crime",
    "Documentary",
    "Drama",
    "Fantasy",
    "Film-Noir",
    "Horror",
    "IMAX",
    "Musical",
    "Mystery",
    "Romance",
    "Sci-Fi",
    "Thriller",
    "War",
    "Western",
]

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "ratingviews.log"
