"""FastAPI dependencies wiring sessions, the clock and services."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..services.booking_service import BookingService
from ..services.flight_service import FlightService
from ..services.route_service import RouteSearchService
from .clock import Clock, system_clock
from .database import get_db


def get_clock() -> Clock:
    """Clock used for booking references and timeline timestamps."""
    return system_clock


def get_booking_service(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> BookingService:
    return BookingService(db, clock=clock)


def get_route_search_service(db: AsyncSession = Depends(get_db)) -> RouteSearchService:
    return RouteSearchService(db)


def get_flight_service(db: AsyncSession = Depends(get_db)) -> FlightService:
    return FlightService(db)
