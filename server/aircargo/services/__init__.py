"""Service layer package."""

from .booking_service import BookingService
from .flight_service import FlightService
from .route_service import RouteSearchService

__all__ = [
    "BookingService",
    "FlightService",
    "RouteSearchService",
]
