"""Builders for catalog rows used across the test suite."""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from aircargo.models import Flight


def make_flight(
    flight_id: str,
    origin: str,
    destination: str,
    departure: datetime,
    arrival: datetime,
    airline_name: str = "Test Air",
) -> Flight:
    """Build an unsaved catalog flight."""
    return Flight(
        flight_id=flight_id,
        flight_number=flight_id.split("-")[0],
        airline_name=airline_name,
        origin=origin,
        destination=destination,
        departure_date_time=departure,
        arrival_date_time=arrival,
    )


async def seed_flights(session: AsyncSession, flights: list[Flight]) -> list[Flight]:
    session.add_all(flights)
    await session.commit()
    return flights
