"""Data access for the flight catalog and booking store."""

from .booking_repository import BookingStore
from .flight_repository import FlightCatalog

__all__ = [
    "BookingStore",
    "FlightCatalog",
]
