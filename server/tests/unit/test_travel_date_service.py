"""Unit tests for the travel date service."""

import pytest

from voyage_site.services.travel_date_service import TravelDateService


@pytest.mark.asyncio
async def test_list_upcoming_filters_slug_date_and_published(test_session, add_travel_date):
    """Only published future dates of the requested voyage are listed."""
    kept = await add_travel_date(travel_slug="japon-kumano", days_ahead=10)
    await add_travel_date(travel_slug="japon-kumano", days_ahead=-10)
    await add_travel_date(travel_slug="japon-kumano", days_ahead=20, published=False)
    await add_travel_date(travel_slug="perou-inca", days_ahead=10)

    rows = await TravelDateService(test_session).list_upcoming("japon-kumano")

    assert [row["id"] for row in rows] == [kept]


@pytest.mark.asyncio
async def test_list_upcoming_orders_by_departure(test_session, add_travel_date):
    late = await add_travel_date(days_ahead=60)
    early = await add_travel_date(days_ahead=5)
    middle = await add_travel_date(days_ahead=30)

    rows = await TravelDateService(test_session).list_upcoming("japon-kumano")

    assert [row["id"] for row in rows] == [early, middle, late]


@pytest.mark.asyncio
async def test_list_upcoming_nests_booked_dates(test_session, add_travel_date):
    travel_date_id = await add_travel_date(bookings=[(0, False), (2, False), (0, True)])

    rows = await TravelDateService(test_session).list_upcoming("japon-kumano")

    assert len(rows) == 1
    booked_dates = rows[0]["booked_dates"]
    assert [(b["booked_places"], b["deleted"]) for b in booked_dates] == [(0, False), (2, False), (0, True)]
    assert all(b["travel_date_id"] == travel_date_id for b in booked_dates)


@pytest.mark.asyncio
async def test_list_upcoming_unknown_slug(test_session, add_travel_date):
    await add_travel_date()

    assert await TravelDateService(test_session).list_upcoming("unknown-voyage") == []


@pytest.mark.asyncio
async def test_list_availability_aggregates_counts(test_session, add_travel_date):
    await add_travel_date(days_ahead=5, bookings=[(0, False), (2, False), (0, True)])
    await add_travel_date(days_ahead=15, custom_display=True, displayed_booked_seat=5, bookings=[(1, False)])

    rows = await TravelDateService(test_session).list_availability("japon-kumano")

    assert [row["nbInterestedBy"] for row in rows] == [3, 6]
    assert all("booked_dates" not in row for row in rows)
    assert rows[1]["custom_display"] is True
    assert rows[1]["displayed_booked_seat"] == 5
