# filmoteca/services/tmdb.py

import asyncio
import random
from datetime import datetime
from typing import Optional, Dict, List, Any

import httpx
from pydantic import ValidationError

from filmoteca.core.auth import get_auth_headers
from filmoteca.core.config import get_settings
from filmoteca.core.httpclient import tmdb_client, tmdb_limiter
from filmoteca.core.logger import setup_logger
from filmoteca.core.models.movie import Movie, UNKNOWN_DIRECTOR, NO_OVERVIEW


logger = setup_logger(__name__)


async def _get(endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
    """
    Internal TMDb GET with retry/backoff and rate-limit handling.
    Returns the decoded JSON body, or None on any failure.
    """
    settings = get_settings()
    if not settings.tmdb_token:
        logger.warning("[TMDB] No token configured; skipping %s", endpoint)
        return None

    query = {"language": settings.tmdb_language, **(params or {})}
    headers = get_auth_headers(settings.tmdb_token)
    retries = settings.tmdb_retries
    backoff = settings.tmdb_backoff_seconds

    for attempt in range(1, retries + 1):
        try:
            async with tmdb_limiter:
                resp = await tmdb_client.get(endpoint, params=query, headers=headers)
            if resp.status_code == 429 and attempt < retries:
                logger.warning("[TMDB] 429 for %s, backing off %.1fs", endpoint, backoff)
                await asyncio.sleep(backoff + random.uniform(0, backoff))
                backoff = min(backoff * 2, 8)
                continue
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as exc:
            logger.error("[TMDB] %s returned HTTP %d", endpoint, exc.response.status_code)
            return None
        except httpx.RequestError as exc:
            logger.error("[TMDB] Request error for %s (attempt %d/%d): %s", endpoint, attempt, retries, exc)
            if attempt < retries:
                await asyncio.sleep(backoff + random.uniform(0, backoff))
                backoff = min(backoff * 2, 8)
        except ValueError as exc:
            logger.error("[TMDB] Invalid JSON from %s: %s", endpoint, exc)
            return None
    logger.error("[TMDB] Giving up on %s after %d attempts", endpoint, retries)
    return None


# ─── Raw endpoints ───────────────────────────────────────────────────────────

async def search_movies(query: str) -> List[Dict[str, Any]]:
    """Free-text title search; [] when nothing is found or the call fails."""
    if not query or not query.strip():
        return []
    logger.info("[TMDB] Searching movie: %s", query)
    data = await _get("/search/movie", {"query": query.strip()})
    if not isinstance(data, dict):
        return []
    return data.get("results") or []


async def fetch_movie_details(tmdb_id: int) -> Optional[Dict[str, Any]]:
    data = await _get(f"/movie/{tmdb_id}")
    return data if isinstance(data, dict) else None


async def fetch_movie_credits(tmdb_id: int) -> Optional[Dict[str, Any]]:
    data = await _get(f"/movie/{tmdb_id}/credits")
    return data if isinstance(data, dict) else None


# ─── Normalization ───────────────────────────────────────────────────────────

def extract_director(credits: Optional[Dict[str, Any]]) -> str:
    if not credits or not credits.get("crew"):
        return UNKNOWN_DIRECTOR
    for person in credits["crew"]:
        if isinstance(person, dict) and person.get("job") == "Director":
            return person.get("name") or UNKNOWN_DIRECTOR
    return UNKNOWN_DIRECTOR


def image_url(path: Optional[str]) -> Optional[str]:
    if not path:
        return None
    return f"{get_settings().tmdb_image_base_url}{path}"


def release_year(release_date: Optional[str]) -> Optional[int]:
    if not release_date:
        return None
    try:
        # datetime.fromisoformat handles “YYYY-MM-DD”
        return datetime.fromisoformat(release_date).year
    except (ValueError, TypeError):
        return None


def normalize_movie(details: Dict[str, Any], credits: Optional[Dict[str, Any]]) -> Movie:
    """
    Combine a details payload and a credits payload into one Movie.
    Raises KeyError when the payload has no id or title.
    """
    if not details.get("title"):
        raise KeyError("title")
    genres = details.get("genres") or []
    return Movie(
        id=details["id"],
        title=details["title"],
        original_title=details.get("original_title"),
        director=extract_director(credits),
        year=release_year(details.get("release_date")),
        overview=details.get("overview") or NO_OVERVIEW,
        poster_url=image_url(details.get("poster_path")),
        backdrop_url=image_url(details.get("backdrop_path")),
        genres=", ".join(g["name"] for g in genres if isinstance(g, dict) and g.get("name")),
        runtime=details.get("runtime"),
        vote_average=details.get("vote_average"),
        popularity=details.get("popularity"),
    )


async def fetch_complete_movie(tmdb_id: int) -> Optional[Movie]:
    """
    Details and credits are requested concurrently. Missing details mean no
    movie; missing credits only cost the director name.
    """
    details, credits = await asyncio.gather(
        fetch_movie_details(tmdb_id),
        fetch_movie_credits(tmdb_id),
    )
    if not details:
        logger.warning("[TMDB] No details for movie %s", tmdb_id)
        return None
    if credits is None:
        logger.info("[TMDB] No credits for movie %s; director unknown", tmdb_id)
    try:
        return normalize_movie(details, credits)
    except (KeyError, TypeError, AttributeError, ValidationError) as e:
        logger.error("[TMDB] Could not normalize movie %s: %s", tmdb_id, e)
        return None
