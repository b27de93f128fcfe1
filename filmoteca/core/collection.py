# filmoteca/core/collection.py
"""
Pure operations over the in-memory collection.

None of these functions touch storage or mutate their input: each returns a
new list, leaving persistence to the caller.
"""
from typing import Any, List, Mapping, Sequence

from filmoteca.core.models.movie import Movie


# ─── CRUD ────────────────────────────────────────────────────────────────────

def add_movie(movies: Sequence[Movie], movie: Movie) -> List[Movie]:
    """Append; uniqueness is checked by the caller with movie_exists()."""
    return [*movies, movie]


def update_movie(movies: Sequence[Movie], movie_id: int, patch: Mapping[str, Any]) -> List[Movie]:
    """
    Merge-patch the movie with the given id. Unknown ids leave the list as is.

    The merged record is validated like a freshly loaded one, so a patch that
    would produce an invalid movie raises ValidationError and changes nothing.
    """
    changes = {k: v for k, v in patch.items() if k != "id"}
    return [
        Movie.model_validate({**movie.model_dump(), **changes}) if movie.id == movie_id else movie
        for movie in movies
    ]


def delete_movie(movies: Sequence[Movie], movie_id: int) -> List[Movie]:
    return [movie for movie in movies if movie.id != movie_id]


def movie_exists(movies: Sequence[Movie], movie_id: int) -> bool:
    return any(movie.id == movie_id for movie in movies)


def rate_movie(movies: Sequence[Movie], movie_id: int, rating: int) -> List[Movie]:
    return update_movie(movies, movie_id, {"rating": rating})


# ─── Listing ─────────────────────────────────────────────────────────────────

def list_movies_by_director(movies: Sequence[Movie], director: str) -> List[Movie]:
    return [movie for movie in movies if movie.director == director]


def list_movies_by_genre(movies: Sequence[Movie], genre: str) -> List[Movie]:
    # substring match on the joined genre string, e.g. "Action" also hits "Action, Adventure"
    return [movie for movie in movies if movie.genres and genre in movie.genres]
