"""
MongoDB record store.

Reads the ratings and movies collections in full and replaces each
output view collection with the current run's rows.
"""

import logging
from typing import Dict, List, Optional

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from src.models.rating import Movie, Rating
from src.storage.documents import to_movies, to_ratings
from src.utils.errors import RecordStoreError

logger = logging.getLogger(__name__)

STAGING_SUFFIX = "__staging"


class MongoRecordStore:
    """
    Record source and result sink backed by one MongoDB database.

    Views are written in two phases: every view is inserted into its own
    staging collection, then each staging collection is renamed over its
    target. Nothing is promoted unless all views were staged.
    """

    def __init__(
        self,
        uri: str,
        database: str,
        ratings_collection: str = "ratings",
        movies_collection: str = "movies",
        rating_fields: Optional[Dict[str, str]] = None,
        movie_fields: Optional[Dict[str, str]] = None,
        timeout_ms: int = 5000,
        client: Optional[MongoClient] = None
    ):
        """
        Initialize Mongo store.

        Args:
            uri: MongoDB connection string
            database: Database holding inputs and views
            ratings_collection: Name of the ratings collection
            movies_collection: Name of the movies collection
            rating_fields: Rating attribute -> document field
            movie_fields: Movie attribute -> document field
            timeout_ms: Server selection timeout
            client: Existing client to reuse instead of connecting
        """
        self.database_name = database
        self.ratings_collection = ratings_collection
        self.movies_collection = movies_collection
        self.rating_fields = rating_fields
        self.movie_fields = movie_fields
        self._owns_client = client is None

        try:
            self.client = client or MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
            self.db = self.client[database]
        except PyMongoError as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise RecordStoreError(f"Failed to connect to MongoDB: {e}") from e

        logger.info(f"Initialized MongoRecordStore with database={database}")

    def load_ratings(self) -> List[Rating]:
        """
        Read every rating document.

        Raises:
            RecordStoreError: If the collection cannot be read
            InputValidationError: If a document is malformed
        """
        documents = self._find_all(self.ratings_collection, self.rating_fields)
        ratings = to_ratings(documents, self.rating_fields)
        logger.info(f"Loaded {len(ratings)} ratings from '{self.ratings_collection}'")
        return ratings

    def load_movies(self) -> List[Movie]:
        """
        Read every movie document.

        Raises:
            RecordStoreError: If the collection cannot be read
            InputValidationError: If a document is malformed
        """
        documents = self._find_all(self.movies_collection, self.movie_fields)
        movies = to_movies(documents, self.movie_fields)
        logger.info(f"Loaded {len(movies)} movies from '{self.movies_collection}'")
        return movies

    def write_views(self, views: Dict[str, List[dict]], metadata: Optional[Dict] = None) -> None:
        """
        Replace every view collection with the given rows.

        Args:
            views: View name -> rows
            metadata: Accepted for interface parity, logged only

        Raises:
            RecordStoreError: If staging or promotion fails
        """
        staged = []
        try:
            # Phase 1: stage
            for name, rows in views.items():
                staging = f"{name}{STAGING_SUFFIX}"
                self.db.drop_collection(staging)
                if rows:
                    # insert_many adds _id to the dicts it receives
                    self.db[staging].insert_many([dict(row) for row in rows], ordered=True)
                    staged.append(name)
                logger.debug(f"Staged {len(rows)} rows for '{name}'")

            # Phase 2: promote
            for name in views:
                if name in staged:
                    self.db[f"{name}{STAGING_SUFFIX}"].rename(name, dropTarget=True)
                else:
                    self.db.drop_collection(name)

        except PyMongoError as e:
            logger.error(f"Failed to write views: {e}")
            self._drop_staging(views)
            raise RecordStoreError(f"Failed to write views: {e}") from e

        logger.info(f"Wrote {len(views)} views to database '{self.database_name}'")
        if metadata:
            logger.debug(f"Run metadata: {metadata}")

    def close(self) -> None:
        """Close the client if this store opened it."""
        if self._owns_client:
            self.client.close()

    def _find_all(self, collection: str, field_map: Optional[Dict[str, str]]) -> List[dict]:
        projection = {"_id": 0}
        if field_map:
            projection.update({field: 1 for field in field_map.values()})

        try:
            return list(self.db[collection].find({}, projection))
        except PyMongoError as e:
            logger.error(f"Failed to read '{collection}': {e}")
            raise RecordStoreError(f"Failed to read '{collection}': {e}") from e

    def _drop_staging(self, views: Dict[str, List[dict]]) -> None:
        for name in views:
            try:
                self.db.drop_collection(f"{name}{STAGING_SUFFIX}")
            except PyMongoError as e:
                logger.warning(f"Could not drop staging collection for '{name}': {e}")
