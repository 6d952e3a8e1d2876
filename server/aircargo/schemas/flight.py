"""Flight and itinerary Pydantic schemas."""

from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


def to_naive_utc(value: datetime) -> datetime:
    """Stored timestamps are naive UTC; convert aware inputs first."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class CreateFlightRequest(BaseModel):
    """Request schema for adding a flight to the catalog."""

    flight_id: str = Field(..., min_length=1, max_length=64, description="Unique flight identifier")
    flight_number: str = Field(..., min_length=1, max_length=16, description="Marketing flight number")
    airline_name: str = Field(..., min_length=1, max_length=128, description="Operating airline")
    origin: str = Field(..., min_length=1, max_length=8, description="Origin airport code")
    destination: str = Field(..., min_length=1, max_length=8, description="Destination airport code")
    departure_date_time: datetime = Field(..., description="Departure time (ISO 8601)")
    arrival_date_time: datetime = Field(..., description="Arrival time (ISO 8601)")

    @field_validator("departure_date_time", "arrival_date_time")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class ListFlightsRequest(BaseModel):
    """Request schema for browsing the catalog."""

    limit: int | None = Field(None, ge=1, le=500, description="Maximum flights to return")


class SearchRoutesRequest(BaseModel):
    """Request schema for an itinerary search."""

    origin: str = Field(..., min_length=1, max_length=8, description="Origin airport code")
    destination: str = Field(..., min_length=1, max_length=8, description="Destination airport code")
    departure_date: date = Field(..., description="Calendar date of the first departure")


class Flight(BaseModel):
    """Flight response schema."""

    model_config = ConfigDict(from_attributes=True)

    flight_id: str = Field(..., description="Unique flight identifier")
    flight_number: str = Field(..., description="Marketing flight number")
    airline_name: str = Field(..., description="Operating airline")
    origin: str = Field(..., description="Origin airport code")
    destination: str = Field(..., description="Destination airport code")
    departure_date_time: datetime = Field(..., description="Departure time (ISO 8601, UTC)")
    arrival_date_time: datetime = Field(..., description="Arrival time (ISO 8601, UTC)")


class ListFlightsResponse(BaseModel):
    """Response schema for the catalog listing."""

    items: list[Flight] = Field(..., description="Flights ordered by departure")


class TransitRoute(BaseModel):
    """One-stop itinerary."""

    first_flight: Flight = Field(..., description="Leg from the origin")
    second_flight: Flight = Field(..., description="Connecting leg to the destination")
    via: str = Field(..., description="Connection airport")
    total_duration_ms: int = Field(..., ge=0, description="First departure to final arrival, in milliseconds")
    total_duration_minutes: int = Field(..., ge=0, description="First departure to final arrival, in minutes")


class SearchRoutesResponse(BaseModel):
    """Response schema for an itinerary search."""

    direct_flights: list[Flight] = Field(..., description="Non-stop flights, earliest first")
    transit_routes: list[TransitRoute] = Field(..., description="One-stop routes, shortest first")
