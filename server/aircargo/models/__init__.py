"""Models module exporting all database models."""

from .booking import Booking, BookingStatus, TimelineEvent
from .flight import Flight

__all__ = [
    # Catalog
    "Flight",

    # Booking aggregate
    "Booking",
    "BookingStatus",
    "TimelineEvent",
]
