# filmoteca/api/schemas.py

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from filmoteca.core.models.movie import Movie

class MoviePatch(BaseModel):
    title:    Optional[str] = None
    director: Optional[str] = None
    year:     Optional[int] = None
    overview: Optional[str] = None
    genres:   Optional[str] = None
    runtime:  Optional[int] = None

    @field_validator("title", "director", "overview", "genres")
    @classmethod
    def _not_null(cls, v: Optional[str]) -> str:
        # may be omitted, but a movie always has these
        if v is None:
            raise ValueError("must not be null")
        return v

class RatingIn(BaseModel):
    rating: int = Field(..., ge=1, le=10)

class MoviesResponse(BaseModel):
    total:  int
    movies: List[Movie]

class StatusResponse(BaseModel):
    status: str
