# filmoteca/api/routers/movies.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from filmoteca.api.deps import get_state
from filmoteca.api.schemas import MoviePatch, MoviesResponse, RatingIn, StatusResponse
from filmoteca.core import collection
from filmoteca.core.models.enums import AddOutcome
from filmoteca.core.models.movie import Movie
from filmoteca.core.state import CollectionState
from filmoteca.services.movies import add_movie_from_tmdb, reset_movies

router = APIRouter(tags=["Movies"])


def _listing(movies: List[Movie]) -> MoviesResponse:
    return MoviesResponse(total=len(movies), movies=movies)


@router.get("", response_model=MoviesResponse, name="movies.list")
async def list_movies(
    director: Optional[str] = None,
    genre: Optional[str] = None,
    state: CollectionState = Depends(get_state),
):
    """
    The whole collection, or the part matching ?director= (exact) and/or ?genre= (substring).
    """
    movies = state.movies
    if director is not None:
        movies = collection.list_movies_by_director(movies, director)
    if genre is not None:
        movies = collection.list_movies_by_genre(movies, genre)
    return _listing(movies)


@router.delete("", response_model=StatusResponse, name="movies.clear")
async def clear_movies(state: CollectionState = Depends(get_state)):
    state.clear()
    return StatusResponse(status="cleared")


@router.post("/reset", response_model=MoviesResponse, name="movies.reset")
async def reset(state: CollectionState = Depends(get_state)):
    """Replace the collection with the default movies."""
    return _listing(await reset_movies(state))


@router.get("/{movie_id}", response_model=Movie, name="movies.get")
async def get_movie(movie_id: int, state: CollectionState = Depends(get_state)):
    movie = state.get(movie_id)
    if movie is None:
        raise HTTPException(404, f"Movie {movie_id} is not in the collection")
    return movie


@router.post("/{tmdb_id}", response_model=Movie, status_code=201, name="movies.add")
async def add_movie(tmdb_id: int, state: CollectionState = Depends(get_state)):
    result = await add_movie_from_tmdb(state, tmdb_id)
    if result.outcome is AddOutcome.DUPLICATE:
        raise HTTPException(409, f"Movie {tmdb_id} is already in the collection")
    if result.outcome is AddOutcome.NOT_FOUND:
        raise HTTPException(502, f"Could not fetch movie {tmdb_id} from TMDb")
    return result.movie


@router.patch("/{movie_id}", response_model=MoviesResponse, name="movies.update")
async def update_movie(
    movie_id: int,
    patch: MoviePatch,
    state: CollectionState = Depends(get_state),
):
    """Merge-patch; an unknown id leaves the collection untouched."""
    try:
        return _listing(state.update(movie_id, patch.model_dump(exclude_unset=True)))
    except ValidationError as e:
        raise HTTPException(422, str(e))


@router.put("/{movie_id}/rating", response_model=MoviesResponse, name="movies.rate")
async def rate_movie(
    movie_id: int,
    body: RatingIn,
    state: CollectionState = Depends(get_state),
):
    return _listing(state.rate(movie_id, body.rating))


@router.delete("/{movie_id}", response_model=MoviesResponse, name="movies.delete")
async def delete_movie(movie_id: int, state: CollectionState = Depends(get_state)):
    return _listing(state.delete(movie_id))
