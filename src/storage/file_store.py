"""
File record store.

Reads ratings and movies from CSV files and writes derived views as JSON,
replacing previous outputs wholesale.
"""

import json
import os
import logging
from datetime import datetime
from typing import Dict, List, Optional

import pandas as pd

from src.models.rating import Movie, Rating
from src.storage.documents import to_movies, to_ratings
from src.utils.errors import RecordStoreError

logger = logging.getLogger(__name__)

METADATA_FILENAME = "run_metadata.json"


class FileRecordStore:
    """
    Local-disk record store.

    Handles:
    - Ratings input (data_root/ratings.csv)
    - Movies input (data_root/movies.csv)
    - Views output (output_dir/<view>.json)
    - Run metadata (output_dir/run_metadata.json)
    """

    def __init__(
        self,
        data_root: str,
        output_dir: str,
        ratings_name: str = "ratings",
        movies_name: str = "movies",
        rating_fields: Optional[Dict[str, str]] = None,
        movie_fields: Optional[Dict[str, str]] = None
    ):
        """
        Initialize file store.

        Args:
            data_root: Directory holding the input CSV files
            output_dir: Directory receiving the view JSON files
            ratings_name: File stem of the ratings CSV
            movies_name: File stem of the movies CSV
            rating_fields: Rating attribute -> CSV column
            movie_fields: Movie attribute -> CSV column
        """
        self.data_root = data_root
        self.output_dir = output_dir
        self.ratings_path = os.path.join(data_root, f"{ratings_name}.csv")
        self.movies_path = os.path.join(data_root, f"{movies_name}.csv")
        self.rating_fields = rating_fields
        self.movie_fields = movie_fields

        try:
            os.makedirs(output_dir, exist_ok=True)
        except OSError as e:
            raise RecordStoreError(f"Cannot create output directory {output_dir}: {e}") from e

        logger.info(f"Initialized FileRecordStore with data_root={data_root}, output_dir={output_dir}")

    def load_ratings(self) -> List[Rating]:
        """
        Load every rating from the ratings CSV.

        Raises:
            RecordStoreError: If the file cannot be read
            InputValidationError: If a row is malformed
        """
        documents = self._read_csv(self.ratings_path)
        ratings = to_ratings(documents, self.rating_fields)
        logger.info(f"Loaded {len(ratings)} ratings from {self.ratings_path}")
        return ratings

    def load_movies(self) -> List[Movie]:
        """
        Load every movie from the movies CSV.

        Raises:
            RecordStoreError: If the file cannot be read
            InputValidationError: If a row is malformed
        """
        # All text, so a movie titled "1984" keeps its title
        documents = self._read_csv(self.movies_path, dtype=str)
        movies = to_movies(documents, self.movie_fields)
        logger.info(f"Loaded {len(movies)} movies from {self.movies_path}")
        return movies

    def write_views(self, views: Dict[str, List[dict]], metadata: Optional[Dict] = None) -> None:
        """
        Replace all view files with the given rows.

        Every view is first written to a temp file; only when all of them
        succeeded are they renamed over the previous outputs.

        Args:
            views: View name -> rows
            metadata: Optional run metadata, saved next to the views

        Raises:
            RecordStoreError: If any file cannot be written
        """
        staged = {}
        try:
            for name, rows in views.items():
                filepath = os.path.join(self.output_dir, f"{name}.json")
                temp_path = f"{filepath}.tmp"
                staged[temp_path] = filepath
                with open(temp_path, 'w') as f:
                    json.dump(rows, f, indent=2)

            for temp_path, filepath in staged.items():
                os.replace(temp_path, filepath)

        except OSError as e:
            logger.error(f"Failed to write views to {self.output_dir}: {e}")
            for temp_path in staged:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
            raise RecordStoreError(f"Failed to write views: {e}") from e

        logger.info(f"Wrote {len(views)} views to {self.output_dir}")

        if metadata is not None:
            self._save_metadata(metadata)

    def load_view(self, name: str) -> Optional[List[dict]]:
        """
        Load a previously written view.

        Returns:
            Rows of the view, or None if it was never written
        """
        filepath = os.path.join(self.output_dir, f"{name}.json")

        if not os.path.exists(filepath):
            logger.debug(f"No view file found for {name}")
            return None

        try:
            with open(filepath, 'r') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RecordStoreError(f"Failed to load view {name}: {e}") from e

    def close(self) -> None:
        """Nothing to release for local files."""

    def _read_csv(self, path: str, dtype=None) -> List[dict]:
        if not os.path.exists(path):
            raise RecordStoreError(f"Input file not found: {path}")

        try:
            df = pd.read_csv(path, dtype=dtype)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.error(f"Failed to read {path}: {e}")
            raise RecordStoreError(f"Failed to read {path}: {e}") from e

        return df.to_dict(orient="records")

    def _save_metadata(self, metadata: Dict) -> None:
        metadata_path = os.path.join(self.output_dir, METADATA_FILENAME)
        data = dict(metadata)
        data.setdefault("generated_at", datetime.utcnow().isoformat() + "Z")

        try:
            with open(metadata_path, 'w') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise RecordStoreError(f"Failed to save run metadata: {e}") from e

        logger.info(f"Metadata saved to {metadata_path}")
