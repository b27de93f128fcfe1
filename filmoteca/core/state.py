# filmoteca/core/state.py

from typing import Any, List, Mapping, Sequence

from filmoteca.core import collection
from filmoteca.core.logger import setup_logger
from filmoteca.core.models.movie import Movie
from filmoteca.core.store import MovieStore

logger = setup_logger(__name__)


class CollectionState:
    """
    The one owner of the in-memory collection.

    Every mutation builds the new list with the pure functions in
    filmoteca.core.collection, writes the full list to the store and only
    then makes it the current list.
    """

    def __init__(self, store: MovieStore) -> None:
        self.store = store
        self._movies: List[Movie] = store.load()
        # normalizes whatever was on disk (or nothing) into a valid document
        store.save(self._movies)
        logger.info("[STATE] Loaded %d movies", len(self._movies))

    @property
    def movies(self) -> List[Movie]:
        return list(self._movies)

    def __len__(self) -> int:
        return len(self._movies)

    def _commit(self, movies: List[Movie]) -> List[Movie]:
        self.store.save(movies)
        self._movies = movies
        return self.movies

    # ─── Queries ─────────────────────────────────────────────────────────────
    def get(self, movie_id: int) -> Movie | None:
        return next((m for m in self._movies if m.id == movie_id), None)

    def exists(self, movie_id: int) -> bool:
        return collection.movie_exists(self._movies, movie_id)

    def by_director(self, director: str) -> List[Movie]:
        return collection.list_movies_by_director(self._movies, director)

    def by_genre(self, genre: str) -> List[Movie]:
        return collection.list_movies_by_genre(self._movies, genre)

    # ─── Mutations ───────────────────────────────────────────────────────────
    def add(self, movie: Movie) -> List[Movie]:
        return self._commit(collection.add_movie(self._movies, movie))

    def update(self, movie_id: int, patch: Mapping[str, Any]) -> List[Movie]:
        return self._commit(collection.update_movie(self._movies, movie_id, patch))

    def delete(self, movie_id: int) -> List[Movie]:
        return self._commit(collection.delete_movie(self._movies, movie_id))

    def rate(self, movie_id: int, rating: int) -> List[Movie]:
        return self._commit(collection.rate_movie(self._movies, movie_id, rating))

    def replace(self, movies: Sequence[Movie]) -> List[Movie]:
        return self._commit(list(movies))

    def clear(self) -> None:
        self.store.clear()
        self._movies = []
