# filmoteca/core/config.py
import json
import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

# ─── 1) Locate the JSON file ──────────────────────────────────────────────────
# Defaults to filmoteca/core/config.json; FILMOTECA_CONFIG points elsewhere.

BASE_DIR    = Path(__file__).parent           # .../filmoteca/core
CONFIG_PATH = Path(os.environ.get("FILMOTECA_CONFIG", BASE_DIR / "config.json"))
TOKEN_ENV   = "FILMOTECA_TMDB_TOKEN"

DEFAULT_MOVIE_IDS = [129, 124, 122, 121, 120, 13, 155, 497, 680, 275]


if not CONFIG_PATH.exists():
    raise FileNotFoundError(f"Cannot find config.json at {CONFIG_PATH!r}")

# ─── 2) Validated settings model ──────────────────────────────────────────────
class Settings(BaseModel):
    # TMDb
    tmdb_token:          Optional[str] = Field(
        None,
        description=f"Bearer token for TMDb; {TOKEN_ENV} takes precedence",
    )
    tmdb_base_url:       str   = "https://api.themoviedb.org/3"
    tmdb_image_base_url: str   = "https://image.tmdb.org/t/p/w500"
    tmdb_language:       str   = "en-US"
    tmdb_rate_limit:     int   = Field(40, ge=1, description="Requests per 10 seconds")
    tmdb_retries:        int   = Field(3, ge=1)
    tmdb_backoff_seconds: float = Field(1.0, ge=0)
    tmdb_timeout:        float = 10.0

    # Collection
    storage_path:         str       = "data/storage.json"
    default_movie_ids:    List[int] = Field(default_factory=lambda: list(DEFAULT_MOVIE_IDS))
    search_results_limit: int       = Field(10, ge=1)

    # Runtime
    log_level: str = "INFO"
    host:      str = "127.0.0.1"
    port:      int = Field(8080, ge=1, le=65535)

    # ─── coerce blank token into None ─────────────────────────────────────────
    @field_validator("tmdb_token", mode="before")
    @classmethod
    def _none_if_blank_token(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def storage_file(self) -> Path:
        return Path(self.storage_path).expanduser()

# ─── 3) Cached loader for settings ───────────────────────────────────────────
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load and return the Settings instance from config.json, cached in-memory.
    The TMDb token is injected from the environment when present, so it never
    has to live in the config file.
    """
    with CONFIG_PATH.open(encoding="utf-8") as f:
        data = json.load(f)
    token = os.environ.get(TOKEN_ENV)
    if token:
        data["tmdb_token"] = token
    return Settings(**data)


def reload_settings() -> None:
    """
    Clear the cached Settings so that next get_settings() re-reads config.json.
    """
    get_settings.cache_clear()
