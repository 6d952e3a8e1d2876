"""Booking-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..models.booking import BookingStatus


class CreateBookingRequest(BaseModel):
    """Request schema for creating a cargo booking."""

    origin: str = Field(..., min_length=1, max_length=8, description="Origin airport code")
    destination: str = Field(..., min_length=1, max_length=8, description="Destination airport code")
    pieces: int = Field(..., ge=1, description="Number of pieces")
    weight_kg: float = Field(..., gt=0, allow_inf_nan=False, description="Total weight in kilograms")
    flight_ids: list[str] = Field(
        default_factory=list,
        max_length=2,
        description="Chosen flights: none, one direct leg or two transit legs"
    )


class BookingReferenceRequest(BaseModel):
    """Request schema addressing a booking by reference."""

    ref_id: str = Field(..., min_length=1, description="Booking reference")


class GetBookingRequest(BookingReferenceRequest):
    """Request schema for getting a booking."""


class CancelBookingRequest(BookingReferenceRequest):
    """Request schema for cancelling a booking."""


class DepartBookingRequest(BookingReferenceRequest):
    """Request schema for marking a booking departed."""

    location: str | None = Field(None, max_length=64, description="Defaults to the booking origin")
    flight_info: str | None = Field(None, max_length=128, description="Flight the cargo left on")


class ArriveBookingRequest(BookingReferenceRequest):
    """Request schema for marking a booking arrived."""

    location: str | None = Field(None, max_length=64, description="Defaults to the booking destination")


class DeliverBookingRequest(BookingReferenceRequest):
    """Request schema for marking a booking delivered."""

    location: str | None = Field(None, max_length=64, description="Defaults to the booking destination")


class ListBookingsRequest(BaseModel):
    """Request schema for listing bookings."""


class TimelineEvent(BaseModel):
    """Timeline entry response schema."""

    model_config = ConfigDict(from_attributes=True)

    event_type: BookingStatus = Field(..., description="Status reached")
    location: str = Field(..., description="Where the event happened")
    flight_info: str | None = Field(None, description="Flight details, departures only")
    notes: str = Field(..., description="Human-readable description")
    timestamp: datetime = Field(..., description="Event time (ISO 8601, UTC)")


class Booking(BaseModel):
    """Booking response schema."""

    model_config = ConfigDict(from_attributes=True)

    ref_id: str = Field(..., description="Booking reference")
    origin: str = Field(..., description="Origin airport code")
    destination: str = Field(..., description="Destination airport code")
    pieces: int = Field(..., ge=1, description="Number of pieces")
    weight_kg: float = Field(..., gt=0, allow_inf_nan=False, description="Total weight in kilograms")
    flight_ids: list[str] = Field(..., description="Booked flights in travel order")
    status: BookingStatus = Field(..., description="Current status")
    timeline: list[TimelineEvent] = Field(..., description="Status history, oldest first")
    created_at: datetime = Field(..., description="Creation time (ISO 8601, UTC)")
    updated_at: datetime = Field(..., description="Last transition time (ISO 8601, UTC)")


class ListBookingsResponse(BaseModel):
    """Response schema for the booking listing."""

    items: list[Booking] = Field(..., description="Bookings, newest first")
