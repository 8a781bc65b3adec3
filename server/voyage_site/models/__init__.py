"""Models module exporting all database models."""

from .content import ContentEntry
from .travel_date import BookedDate, TravelDate

__all__ = [
    # Booking entities
    "TravelDate",
    "BookedDate",

    # Content entity
    "ContentEntry",
]
