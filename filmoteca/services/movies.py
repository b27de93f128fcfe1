# filmoteca/services/movies.py

import asyncio
from dataclasses import dataclass
from typing import Iterable, List, Optional

from filmoteca.core.config import get_settings
from filmoteca.core.logger import setup_logger
from filmoteca.core.models.enums import AddOutcome
from filmoteca.core.models.movie import Movie
from filmoteca.core.state import CollectionState
from .tmdb import fetch_complete_movie

logger = setup_logger(__name__)
LOG_TAG = "[MOVIE] 🎬"


@dataclass
class AddResult:
    outcome: AddOutcome
    movie: Optional[Movie] = None


async def fetch_movies(tmdb_ids: Iterable[int]) -> List[Movie]:
    """
    Fetch every id concurrently and wait for all of them.
    The result keeps the order of tmdb_ids; failed lookups are left out.
    """
    ids = list(tmdb_ids)
    results = await asyncio.gather(
        *(fetch_complete_movie(tmdb_id) for tmdb_id in ids),
        return_exceptions=True,
    )
    movies: List[Movie] = []
    for tmdb_id, result in zip(ids, results):
        if isinstance(result, BaseException):
            logger.error(f"{LOG_TAG} Error fetching movie {tmdb_id}: {result}")
        elif result is None:
            logger.warning(f"{LOG_TAG} Movie {tmdb_id} unavailable, skipped")
        else:
            movies.append(result)
    return movies


async def reset_movies(state: CollectionState) -> List[Movie]:
    """Replace the collection with the default movies that could be fetched."""
    settings = get_settings()
    movies = await fetch_movies(settings.default_movie_ids)
    state.replace(movies)
    logger.info(
        f"{LOG_TAG} Default movies saved: {len(movies)}/{len(settings.default_movie_ids)}"
    )
    return movies


async def add_movie_from_tmdb(state: CollectionState, tmdb_id: int) -> AddResult:
    """
    Add one catalog movie. Duplicates are rejected before any request is made.
    """
    if state.exists(tmdb_id):
        logger.info(f"{LOG_TAG} 🚫 Already in collection: {tmdb_id}")
        return AddResult(AddOutcome.DUPLICATE, state.get(tmdb_id))

    movie = await fetch_complete_movie(tmdb_id)
    if not movie:
        logger.warning(f"{LOG_TAG} ❌ Could not fetch movie {tmdb_id}")
        return AddResult(AddOutcome.NOT_FOUND)

    # the id may have been added while the request was in flight
    if state.exists(movie.id):
        return AddResult(AddOutcome.DUPLICATE, state.get(movie.id))

    state.add(movie)
    logger.info(f"{LOG_TAG} ✅ Added: {movie.title} ({movie.id})")
    return AddResult(AddOutcome.ADDED, movie)
