"""HTTP client for the booking dates endpoint, as used by a voyage page."""

import logging
from typing import Any, Optional, Union

import httpx

logger = logging.getLogger(__name__)

BookingDates = Union[list[dict[str, Any]], dict[str, Any]]


class BookingDatesClient:
    """
    Loads the travel dates of a voyage from the booking dates endpoint.

    ``dates`` holds the body exactly as returned: a list of travel dates, or
    an ``{"error": ...}`` object when the server-side query failed.
    """

    def __init__(self, client: httpx.AsyncClient, base_path: str = "/api/v1"):
        self.client = client
        self.base_path = base_path.rstrip("/")
        self.dates: BookingDates = []
        self.is_loading = False

    async def get_dates(self, voyage_slug: str) -> BookingDates:
        """
        Request the travel dates of a voyage.

        Raises:
            httpx.HTTPError: On transport failures or non-2xx responses
        """
        self.is_loading = True
        try:
            response = await self.client.get(f"{self.base_path}/booking/{voyage_slug}/dates")
            response.raise_for_status()
            self.dates = response.json()
        finally:
            self.is_loading = False

        if isinstance(self.dates, dict) and "error" in self.dates:
            logger.warning(
                "Booking dates returned an error",
                extra={"voyage_slug": voyage_slug, "error": self.dates["error"]}
            )

        return self.dates

    async def load(self, voyage_slug: Optional[str]) -> BookingDates:
        """Load the dates when a voyage slug is known; keep the current dates otherwise."""
        if not voyage_slug:
            return self.dates
        return await self.get_dates(voyage_slug)
