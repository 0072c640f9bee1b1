"""Movie-related data models."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...utils.text_utils import clean_na


class SearchResult(BaseModel):
    """One match from the OMDb search endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    imdb_id: str = Field(..., alias="imdbID", description="IMDb identifier")
    title: str = Field(..., alias="Title", description="Movie title")
    year: str = Field(default="", alias="Year", description="Release year or year range")
    poster_url: Optional[str] = Field(None, alias="Poster", description="Poster image URL")

    @field_validator("poster_url", mode="before")
    @classmethod
    def drop_missing_poster(cls, v: Optional[str]) -> Optional[str]:
        """OMDb reports missing posters as "N/A"."""
        return clean_na(v)


class MovieDetail(BaseModel):
    """Full movie record from the OMDb detail endpoint."""

    model_config = ConfigDict(frozen=True)

    imdb_id: str = Field(..., description="IMDb identifier")
    title: str = Field(..., description="Movie title")
    year: str = Field(default="", description="Release year")
    poster_url: Optional[str] = Field(None, description="Poster image URL")
    runtime: Optional[str] = Field(None, description="Runtime as reported, e.g. '126 min'")
    runtime_minutes: Optional[int] = Field(None, ge=0, description="Runtime in minutes")
    imdb_rating: Optional[float] = Field(None, ge=0.0, le=10.0, description="IMDb rating")
    plot: Optional[str] = Field(None, description="Plot summary")
    release_date: Optional[date] = Field(None, description="Release date")
    actors: Optional[str] = Field(None, description="Main cast")
    director: Optional[str] = Field(None, description="Director(s)")
    genre: Optional[str] = Field(None, description="Comma separated genres")


class WatchedEntry(BaseModel):
    """A movie the user committed to the watched list with a personal rating."""

    model_config = ConfigDict(populate_by_name=True)

    imdb_id: str = Field(..., alias="imdbID", description="IMDb identifier")
    title: str = Field(..., alias="title", description="Movie title")
    year: str = Field(default="", alias="year", description="Release year")
    poster_url: Optional[str] = Field(None, alias="poster", description="Poster image URL")
    imdb_rating: Optional[float] = Field(
        None, alias="imdbRating", ge=0.0, le=10.0, description="IMDb rating"
    )
    user_rating: int = Field(..., alias="userRating", ge=1, le=10, description="User rating")
    runtime_minutes: Optional[int] = Field(
        None, alias="runtime", ge=0, description="Runtime in minutes"
    )
    rating_change_count: int = Field(
        default=0,
        alias="countRatingDecisions",
        ge=0,
        description="How often the rating was adjusted before committing",
    )

    @classmethod
    def from_detail(
        cls, detail: MovieDetail, user_rating: int, rating_change_count: int
    ) -> "WatchedEntry":
        """Build an entry from a fetched detail record and the user's rating."""
        return cls(
            imdb_id=detail.imdb_id,
            title=detail.title,
            year=detail.year,
            poster_url=detail.poster_url,
            imdb_rating=detail.imdb_rating,
            user_rating=user_rating,
            runtime_minutes=detail.runtime_minutes,
            rating_change_count=rating_change_count,
        )


class WatchlistSummary(BaseModel):
    """Aggregate statistics over the watched list."""

    count: int = Field(default=0, ge=0, description="Number of watched entries")
    avg_imdb_rating: float = Field(default=0.0, description="Mean IMDb rating")
    avg_user_rating: float = Field(default=0.0, description="Mean user rating")
    avg_runtime: float = Field(default=0.0, description="Mean runtime in minutes")
