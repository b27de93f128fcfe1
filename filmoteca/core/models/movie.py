# filmoteca/core/models/movie.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

UNKNOWN_DIRECTOR = "Unknown director"
NO_OVERVIEW = "Overview not available"


class Movie(BaseModel):
    """
    One entry of the collection, normalized from TMDb details + credits.

    Serialized with camelCase keys (posterUrl, voteAverage, ...) so the stored
    document keeps the same shape the collection has always used.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    original_title: Optional[str] = None
    director: str = UNKNOWN_DIRECTOR
    year: Optional[int] = None
    overview: str = NO_OVERVIEW
    poster_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    genres: str = ""
    runtime: Optional[int] = None
    vote_average: Optional[float] = Field(None, ge=0, le=10)
    popularity: Optional[float] = None
    rating: Optional[int] = Field(None, ge=1, le=10)

    @property
    def display_rating(self) -> float:
        """User rating wins over the TMDb average."""
        return self.rating or self.vote_average or 0

    @property
    def score_text(self) -> str:
        if self.rating:
            return f"{self.rating}/10"
        if self.vote_average:
            return f"{self.vote_average:.1f}"
        return ""
