"""Travel date service for booking availability queries."""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models.travel_date import TravelDate
from .availability import aggregate_travel_dates

logger = logging.getLogger(__name__)


class TravelDateService:
    """Service for travel date queries."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_upcoming(self, voyage_slug: str) -> list[dict[str, Any]]:
        """
        List the published future travel dates of a voyage.

        Args:
            voyage_slug: Slug of the parent voyage

        Returns:
            Travel date rows with their booked dates nested
        """
        now = datetime.now(timezone.utc)

        stmt = (
            select(TravelDate)
            .options(selectinload(TravelDate.booked_dates))
            .where(
                TravelDate.travel_slug == voyage_slug,
                TravelDate.departure_date > now,
                TravelDate.published.is_(True),
            )
            .order_by(TravelDate.departure_date, TravelDate.id)
        )

        result = await self.db.execute(stmt)
        rows = [travel_date.to_row() for travel_date in result.scalars()]

        logger.debug(
            "Upcoming travel dates loaded",
            extra={
                "voyage_slug": voyage_slug,
                "total_found": len(rows),
                "booked_dates": sum(len(row["booked_dates"]) for row in rows),
            }
        )

        return rows

    async def list_availability(self, voyage_slug: str) -> list[dict[str, Any]]:
        """List upcoming travel dates with their interested-by counts."""
        rows = await self.list_upcoming(voyage_slug)
        return aggregate_travel_dates(rows)
