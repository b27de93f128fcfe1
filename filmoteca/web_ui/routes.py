# filmoteca/web_ui/routes.py

from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.templating import Jinja2Templates

from filmoteca.api.deps import get_state
from filmoteca.core.config import get_settings
from filmoteca.core.logger import setup_logger
from filmoteca.core.models.enums import Action, AddOutcome
from filmoteca.core.models.movie import Movie
from filmoteca.core.state import CollectionState
from filmoteca.services.movies import add_movie_from_tmdb, reset_movies
from filmoteca.services.tmdb import release_year, search_movies
from filmoteca.web_ui.stars import MAX_STARS, star_segments

logger = setup_logger(__name__)

router = APIRouter()
BASE_DIR = Path(__file__).resolve().parent
TEMPLATE_DIR = BASE_DIR / "templates"
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
templates.env.globals.update(
    actions=list(Action),
    star_segments=star_segments,
    max_stars=MAX_STARS,
    release_year=release_year,
)

NO_MOVIES = "No movies found."


def _render(
    request: Request,
    *,
    message: Optional[str] = None,
    form: Optional[str] = None,
    movies: Optional[List[Movie]] = None,
    results: Optional[List[Dict[str, Any]]] = None,
    status_code: int = 200,
):
    """Render the single-page dashboard with whatever the last action produced."""
    return templates.TemplateResponse(
        request,
        "home.html",
        {"message": message, "form": form, "movies": movies, "results": results},
        status_code=status_code,
    )


@router.get("/", include_in_schema=False)
def home_page(request: Request):
    """
    Render the dashboard home page.
    """
    return _render(request)


@router.post("/action/{action}", include_in_schema=False, name="run_action")
async def run_action(
    request: Request,
    action: Action,
    state: CollectionState = Depends(get_state),
):
    """Menu dispatcher; every Action has exactly one branch."""
    match action:
        case Action.INIT:
            movies = await reset_movies(state)
            return _render(
                request,
                message=f"🎬 Filmoteca started with {len(movies)} default movies!",
                movies=movies,
            )
        case Action.LIST:
            return _render(request, movies=state.movies)
        case Action.ADD:
            return _render(request, form="add")
        case Action.UPDATE:
            return _render(request, form="update")
        case Action.DELETE:
            return _render(request, form="delete")
        case Action.CLEAR:
            state.clear()
            return _render(request, message="Filmoteca emptied.")
        case Action.LIST_BY_DIRECTOR:
            return _render(request, form="director")
        case Action.LIST_BY_GENRE:
            return _render(request, form="genre")
        case Action.EXIT:
            return _render(request, message="Bye, bye! :)")


@router.post("/movies/search", include_in_schema=False, name="search_movies")
async def search_page(request: Request, query: str = Form(...)):
    results = await search_movies(query)
    if not results:
        return _render(request, form="add", message=NO_MOVIES)
    limit = get_settings().search_results_limit
    return _render(request, form="add", results=results[:limit])


@router.post("/movies/add", include_in_schema=False, name="add_movie")
async def add_movie(
    request: Request,
    tmdb_id: int = Form(...),
    state: CollectionState = Depends(get_state),
):
    result = await add_movie_from_tmdb(state, tmdb_id)
    match result.outcome:
        case AddOutcome.ADDED:
            message = f'Movie "{result.movie.title}" added!'
        case AddOutcome.DUPLICATE:
            message = "This movie is already in your collection!"
        case AddOutcome.NOT_FOUND:
            message = "Could not fetch this movie's data."
    return _render(request, message=message)


@router.post("/movies/update", include_in_schema=False, name="update_movie")
async def update_movie(
    request: Request,
    movie_id: int = Form(...),
    title: str = Form(""),
    director: str = Form(""),
    year: str = Form(""),
    overview: str = Form(""),
    state: CollectionState = Depends(get_state),
):
    patch: Dict[str, Any] = {}
    if title.strip():
        patch["title"] = title.strip()
    if director.strip():
        patch["director"] = director.strip()
    if year.strip():
        try:
            patch["year"] = int(year)
        except ValueError:
            return _render(request, form="update", message="Year must be a number.", status_code=400)
    if overview.strip():
        patch["overview"] = overview.strip()

    state.update(movie_id, patch)
    return _render(request, message="Movie updated!")


@router.post("/movies/delete", include_in_schema=False, name="delete_movie")
async def delete_movie(
    request: Request,
    movie_id: int = Form(...),
    state: CollectionState = Depends(get_state),
):
    state.delete(movie_id)
    return _render(request, message="Movie removed!")


@router.post("/movies/filter/director", include_in_schema=False, name="filter_by_director")
async def filter_by_director(
    request: Request,
    director: str = Form(...),
    state: CollectionState = Depends(get_state),
):
    movies = state.by_director(director)
    if not movies:
        return _render(request, message=NO_MOVIES)
    return _render(request, movies=movies)


@router.post("/movies/filter/genre", include_in_schema=False, name="filter_by_genre")
async def filter_by_genre(
    request: Request,
    genre: str = Form(...),
    state: CollectionState = Depends(get_state),
):
    movies = state.by_genre(genre)
    if not movies:
        return _render(request, message=NO_MOVIES)
    return _render(request, movies=movies)


@router.post("/movies/{movie_id}/rating", include_in_schema=False, name="rate_movie")
async def rate_movie(
    request: Request,
    movie_id: int,
    rating: int = Form(..., ge=1, le=MAX_STARS),
    state: CollectionState = Depends(get_state),
):
    movies = state.rate(movie_id, rating)
    return _render(request, movies=movies)
