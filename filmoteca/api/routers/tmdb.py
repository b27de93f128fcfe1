from fastapi import APIRouter, HTTPException
from filmoteca.core.models.movie import Movie
from filmoteca.services.tmdb import fetch_complete_movie, search_movies

router = APIRouter(tags=["TMDb"])


@router.get("/search", response_model=list[dict], name="tmdb.search")
async def api_tmdb_search(q: str):
    """Raw TMDb search results; empty when TMDb is unreachable."""
    return await search_movies(q)


@router.get("/movie/{tmdb_id}", response_model=Movie, name="tmdb.movie")
async def api_tmdb_movie(tmdb_id: int):
    movie = await fetch_complete_movie(tmdb_id)
    if not movie:
        raise HTTPException(404, f"No TMDb info for movie {tmdb_id}")
    return movie
