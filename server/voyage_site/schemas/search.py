"""Search content Pydantic schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from ..services.search_data import FetchStatus, SearchDataEntry


class SearchDataEntryResponse(BaseModel):
    """State of one cached search data entry."""

    status: FetchStatus = Field(..., description="Fetch status")
    value: Any = Field(None, description="Cached value, set once the fetch succeeded")
    error: Optional[str] = Field(None, description="Failure message of the last fetch")

    @classmethod
    def from_entry(cls, entry: SearchDataEntry) -> "SearchDataEntryResponse":
        return cls(
            status=entry.status,
            value=entry.value,
            error=str(entry.error) if entry.error is not None else None,
        )


class SearchDataResponse(BaseModel):
    """Search data cached for the calling session."""

    session_id: str = Field(..., description="Client session ID")
    entries: dict[str, SearchDataEntryResponse] = Field(
        ...,
        description="Entries keyed by destinations, regions, searchFieldContent and contentText"
    )


class SearchPageResponse(BaseModel):
    """Render payload of the search page."""

    data: dict[str, Any] = Field(..., description="Query results keyed by render cache key")
    errors: dict[str, str] = Field(default_factory=dict, description="Failed queries keyed by render cache key")
    is_loading: bool = Field(..., description="Whether any query is still pending")
    has_error: bool = Field(..., description="Whether any query failed")
