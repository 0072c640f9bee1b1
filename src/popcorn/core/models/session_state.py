"""Observable state snapshots of the search and detail sessions."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .movie import MovieDetail, SearchResult


class SearchStatus(str, Enum):
    """Search session status enumeration."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class DetailStatus(str, Enum):
    """Detail session status enumeration."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


class SearchState(BaseModel):
    """Snapshot of a search session."""

    model_config = ConfigDict(frozen=True)

    status: SearchStatus = Field(default=SearchStatus.IDLE, description="Session status")
    query: str = Field(default="", description="Query the state belongs to")
    results: List[SearchResult] = Field(default_factory=list, description="Matches")
    error_message: Optional[str] = Field(None, description="User-facing error message")


class DetailState(BaseModel):
    """Snapshot of a detail session."""

    model_config = ConfigDict(frozen=True)

    status: DetailStatus = Field(default=DetailStatus.IDLE, description="Session status")
    imdb_id: Optional[str] = Field(None, description="Selected movie")
    detail: Optional[MovieDetail] = Field(None, description="Fetched detail record")
    rating_change_count: int = Field(default=0, ge=0, description="Rating events so far")
    user_rating: Optional[int] = Field(None, ge=1, le=10, description="Last emitted rating")
