"""Read access to the flight catalog."""

import logging
from datetime import datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ConflictError
from ..models.flight import Flight

logger = logging.getLogger(__name__)


class FlightCatalog:
    """Flight lookups used by booking validation and itinerary search."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_ids(self, flight_ids: Sequence[str]) -> list[Flight]:
        """Flights whose external id is in ``flight_ids``; unknown ids are simply absent."""
        if not flight_ids:
            return []
        stmt = select(Flight).where(Flight.flight_id.in_(set(flight_ids)))
        result = await self.db.execute(stmt)
        return list(result.scalars())

    async def find_by_origin_destination_window(
        self,
        origin: str,
        destination: str,
        start: datetime,
        end: datetime,
    ) -> list[Flight]:
        """Flights on one city pair departing in ``[start, end)``, earliest first."""
        stmt = (
            select(Flight)
            .where(
                Flight.origin == origin,
                Flight.destination == destination,
                Flight.departure_date_time >= start,
                Flight.departure_date_time < end,
            )
            .order_by(Flight.departure_date_time, Flight.flight_id)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars())

    async def find_by_origin_window(
        self,
        origin: str,
        exclude_destination: str | None,
        start: datetime,
        end: datetime,
    ) -> list[Flight]:
        """Flights leaving ``origin`` in ``[start, end)`` not bound for ``exclude_destination``."""
        conditions = [
            Flight.origin == origin,
            Flight.departure_date_time >= start,
            Flight.departure_date_time < end,
        ]
        if exclude_destination:
            conditions.append(Flight.destination != exclude_destination)

        stmt = select(Flight).where(*conditions).order_by(Flight.departure_date_time, Flight.flight_id)
        result = await self.db.execute(stmt)
        return list(result.scalars())

    async def list_flights(self, limit: int) -> list[Flight]:
        stmt = select(Flight).order_by(Flight.departure_date_time, Flight.flight_id).limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars())

    async def add(self, flight: Flight) -> Flight:
        """Store a new flight. Used by catalog administration only."""
        flight_id = flight.flight_id
        self.db.add(flight)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                "Flight insert rejected",
                extra={"flight_id": flight_id, "error": str(e.orig)}
            )
            raise ConflictError(
                detail=f"Flight {flight_id} already exists",
                conflicting_resource={"flight_id": flight_id},
                code="DUPLICATE_FLIGHT",
                retryable=False,
            ) from e
        await self.db.refresh(flight)
        return flight
