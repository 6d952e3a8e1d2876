"""Flight catalog administration."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import ValidationError
from ..models.flight import Flight
from ..repositories.flight_repository import FlightCatalog
from ..schemas.flight import CreateFlightRequest

logger = logging.getLogger(__name__)


class FlightService:
    """Service for loading and browsing catalog flights."""

    def __init__(self, db: AsyncSession, catalog: FlightCatalog | None = None):
        self.db = db
        self.catalog = catalog or FlightCatalog(db)

    async def create_flight(self, request: CreateFlightRequest) -> Flight:
        """
        Add a flight to the catalog.

        Raises:
            ValidationError: If the flight lands before it departs
            ConflictError: If the flight id is already present
        """
        departure = request.departure_date_time
        arrival = request.arrival_date_time
        if arrival <= departure:
            raise ValidationError(
                detail="arrival_date_time must be after departure_date_time",
                violations=[{
                    "path": "arrival_date_time",
                    "message": "must be after departure_date_time",
                }],
            )

        flight = await self.catalog.add(
            Flight(
                flight_id=request.flight_id,
                flight_number=request.flight_number,
                airline_name=request.airline_name,
                origin=request.origin,
                destination=request.destination,
                departure_date_time=departure,
                arrival_date_time=arrival,
            )
        )

        logger.info(
            "Flight created successfully",
            extra={
                "flight_id": flight.flight_id,
                "origin": flight.origin,
                "destination": flight.destination,
                "departure_date_time": flight.departure_date_time.isoformat(),
            }
        )
        return flight

    async def list_flights(self, limit: int | None = None) -> list[Flight]:
        """Flights ordered by departure time."""
        return await self.catalog.list_flights(
            settings.flight_list_default_limit if limit is None else limit
        )
