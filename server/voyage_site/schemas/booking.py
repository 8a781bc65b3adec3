"""Booking dates Pydantic schemas."""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TravelDateAvailability(BaseModel):
    """A published upcoming travel date with its interested-by count."""

    # Columns not listed here are passed through unchanged
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int = Field(..., description="Travel date ID")
    travel_slug: str = Field(..., description="Slug of the parent voyage")
    departure_date: datetime = Field(..., description="Departure time (ISO 8601)")
    published: bool = Field(..., description="Whether the travel date is published")
    custom_display: bool = Field(False, description="Whether the editorial seat override applies")
    displayed_booked_seat: Optional[int] = Field(None, description="Editorial seat override")
    created_at: Optional[datetime] = Field(None, description="Creation time (ISO 8601)")
    nb_interested_by: int = Field(
        ...,
        alias="nbInterestedBy",
        description="People who booked places or registered interest"
    )


class UpstreamError(BaseModel):
    """An error raised by the database client, as captured."""

    type: str = Field(..., description="Exception class name")
    message: str = Field(..., description="Error message")
    code: Optional[str] = Field(
        None,
        description="SQLSTATE of the database error, or errno name of a connection failure"
    )


class BookingDatesErrorResponse(BaseModel):
    """Returned instead of the travel dates when the query fails."""

    error: UpstreamError


BookingDatesResponse = Union[list[TravelDateAvailability], BookingDatesErrorResponse]
