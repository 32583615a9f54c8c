"""
Conversion of raw store documents into input records.
"""

import logging
from typing import Dict, Iterable, List, Optional

from src.models.rating import Movie, Rating
from src.utils.errors import InputValidationError

logger = logging.getLogger(__name__)


def to_ratings(
    documents: Iterable[dict],
    field_map: Optional[Dict[str, str]] = None
) -> List[Rating]:
    """
    Convert rating documents to Rating records.

    Raises:
        InputValidationError: If a document lacks a field or holds a
            value of the wrong type
    """
    ratings = []
    for position, doc in enumerate(documents):
        try:
            ratings.append(Rating.from_dict(doc, field_map))
        except (KeyError, TypeError, ValueError) as e:
            raise InputValidationError(f"Malformed rating #{position}: {doc!r} ({e})") from e
    logger.debug(f"Parsed {len(ratings)} rating documents")
    return ratings


def to_movies(
    documents: Iterable[dict],
    field_map: Optional[Dict[str, str]] = None
) -> List[Movie]:
    """
    Convert movie documents to Movie records.

    Raises:
        InputValidationError: If a document has no usable movie id
    """
    movies = []
    for position, doc in enumerate(documents):
        try:
            movies.append(Movie.from_dict(doc, field_map))
        except (KeyError, TypeError, ValueError) as e:
            raise InputValidationError(f"Malformed movie #{position}: {doc!r} ({e})") from e
    logger.debug(f"Parsed {len(movies)} movie documents")
    return movies
