"""Integration tests for the booking dates endpoint."""

import errno

import pytest
from sqlalchemy.exc import OperationalError

from voyage_site.core.dependencies import get_db


class FailingSession:
    """Session whose queries raise the given error."""

    def __init__(self, error: BaseException):
        self.error = error

    async def execute(self, *args, **kwargs):
        raise self.error


def override_with_failure(app, error: BaseException):
    async def failing_db():
        yield FailingSession(error)

    app.dependency_overrides[get_db] = failing_db


@pytest.mark.asyncio
async def test_booking_dates_endpoint(test_client, add_travel_date):
    """Dates are returned with their interested-by counts."""
    await add_travel_date(days_ahead=5, bookings=[(0, False), (2, False), (0, True)])
    await add_travel_date(days_ahead=15, custom_display=True, displayed_booked_seat=5, bookings=[(1, False)])

    response = await test_client.get("/api/v1/booking/japon-kumano/dates")

    assert response.status_code == 200
    data = response.json()
    assert isinstance(data, list)
    assert [item["nbInterestedBy"] for item in data] == [3, 6]
    for item in data:
        assert item["travel_slug"] == "japon-kumano"
        assert item["published"] is True
        assert "booked_dates" not in item
        assert "departure_date" in item


@pytest.mark.asyncio
async def test_booking_dates_endpoint_no_dates(test_client, add_travel_date):
    await add_travel_date(days_ahead=-3)

    response = await test_client.get("/api/v1/booking/japon-kumano/dates")

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_booking_dates_endpoint_query_failure(test_app, test_client):
    """A failed query returns the error object in place of the list."""
    override_with_failure(
        test_app,
        OperationalError("SELECT travel_dates", {}, ConnectionResetError("connection reset")),
    )

    response = await test_client.get("/api/v1/booking/japon-kumano/dates")

    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"error"}
    assert data["error"]["type"] == "OperationalError"
    assert "connection reset" in data["error"]["message"]
    assert "code" not in data["error"]


@pytest.mark.asyncio
async def test_booking_dates_endpoint_database_unreachable(test_app, test_client):
    """A refused connection surfaces from the driver unwrapped and still yields the error object."""
    override_with_failure(
        test_app,
        ConnectionRefusedError(errno.ECONNREFUSED, "Connect call failed ('127.0.0.1', 1)"),
    )

    response = await test_client.get("/api/v1/booking/japon-kumano/dates")

    assert response.status_code == 200
    assert response.json() == {
        "error": {
            "type": "ConnectionRefusedError",
            "message": f"[Errno {errno.ECONNREFUSED}] Connect call failed ('127.0.0.1', 1)",
            "code": "ECONNREFUSED",
        }
    }


@pytest.mark.asyncio
async def test_booking_dates_endpoint_timeout(test_app, test_client):
    override_with_failure(test_app, TimeoutError("connection timed out"))

    response = await test_client.get("/api/v1/booking/japon-kumano/dates")

    assert response.status_code == 200
    assert response.json()["error"]["type"] == "TimeoutError"
