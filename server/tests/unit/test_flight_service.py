"""Unit tests for flight catalog administration."""

from datetime import datetime, timedelta, timezone

import pytest

from aircargo.core.exceptions import ConflictError, ValidationError
from aircargo.schemas.flight import CreateFlightRequest
from aircargo.services.flight_service import FlightService


def _request(**overrides) -> CreateFlightRequest:
    data = {
        "flight_id": "AI665-0501",
        "flight_number": "AI665",
        "airline_name": "Air India",
        "origin": "BOM",
        "destination": "BLR",
        "departure_date_time": datetime(2024, 5, 1, 14, 0),
        "arrival_date_time": datetime(2024, 5, 1, 15, 45),
    }
    data.update(overrides)
    return CreateFlightRequest(**data)


@pytest.fixture
def flight_service(test_session):
    return FlightService(test_session)


@pytest.mark.asyncio
async def test_create_flight(flight_service):
    flight = await flight_service.create_flight(_request())

    assert flight.id is not None
    assert flight.flight_id == "AI665-0501"
    assert flight.arrival_date_time - flight.departure_date_time == timedelta(minutes=105)


@pytest.mark.asyncio
async def test_create_flight_normalizes_to_utc(flight_service):
    """Offset timestamps are stored as naive UTC."""
    ist = timezone(timedelta(hours=5, minutes=30))
    flight = await flight_service.create_flight(_request(
        departure_date_time=datetime(2024, 5, 1, 14, 0, tzinfo=ist),
        arrival_date_time=datetime(2024, 5, 1, 15, 45, tzinfo=ist),
    ))

    assert flight.departure_date_time == datetime(2024, 5, 1, 8, 30)
    assert flight.departure_date_time.tzinfo is None


@pytest.mark.asyncio
async def test_create_flight_rejects_backwards_times(flight_service):
    with pytest.raises(ValidationError):
        await flight_service.create_flight(_request(arrival_date_time=datetime(2024, 5, 1, 14, 0)))


@pytest.mark.asyncio
async def test_create_flight_duplicate_id(flight_service):
    await flight_service.create_flight(_request())

    with pytest.raises(ConflictError) as exc_info:
        await flight_service.create_flight(_request(flight_number="AI666"))

    assert exc_info.value.problem_details["code"] == "DUPLICATE_FLIGHT"
    assert exc_info.value.problem_details["retryable"] is False


@pytest.mark.asyncio
async def test_list_flights_ordered_and_limited(flight_service, catalog):
    flights = await flight_service.list_flights()

    assert [f.flight_id for f in flights] == ["6E201-0501", "AI101-0501", "6E301-0501"]

    assert len(await flight_service.list_flights(limit=2)) == 2
