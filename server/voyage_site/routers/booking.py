"""Booking router: travel dates of a voyage with their interested-by counts."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.dependencies import get_db
from ..core.exceptions import describe_error
from ..core.observability import BOOKING_DATES_SERVED
from ..schemas.booking import (
    BookingDatesErrorResponse,
    BookingDatesResponse,
    TravelDateAvailability,
    UpstreamError,
)
from ..services.travel_date_service import TravelDateService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/booking", tags=["booking"])


@router.get("/{voyage_slug}/dates", response_model=BookingDatesResponse)
async def get_booking_dates(
    voyage_slug: str,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """
    List the published upcoming travel dates of a voyage.

    Each date carries ``nbInterestedBy`` in place of its booked dates. When
    the database query fails, or the database cannot be reached, the body is
    ``{"error": {...}}`` instead of an array, with the default status code.
    """
    travel_date_service = TravelDateService(db)

    try:
        travel_dates = await travel_date_service.list_availability(voyage_slug)
    except (SQLAlchemyError, OSError) as e:
        logger.error(
            "Travel dates query failed",
            extra={"voyage_slug": voyage_slug, "error": str(e)},
            exc_info=True
        )
        response_data = BookingDatesErrorResponse(error=UpstreamError(**describe_error(e)))
        return JSONResponse(
            status_code=200,
            content=response_data.model_dump(exclude_none=True)
        )

    content = [
        TravelDateAvailability.model_validate(travel_date).model_dump(mode="json", by_alias=True)
        for travel_date in travel_dates
    ]
    BOOKING_DATES_SERVED.labels(voyage_slug=voyage_slug).inc(len(content))

    logger.info(
        "Booking dates served",
        extra={"voyage_slug": voyage_slug, "total_found": len(content)}
    )

    return JSONResponse(status_code=200, content=content)
