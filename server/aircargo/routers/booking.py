"""Booking router for cargo booking operations."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..core.dependencies import get_booking_service
from ..schemas.booking import (
    ArriveBookingRequest,
    Booking,
    CancelBookingRequest,
    CreateBookingRequest,
    DeliverBookingRequest,
    DepartBookingRequest,
    GetBookingRequest,
    ListBookingsRequest,
    ListBookingsResponse,
)
from ..schemas.common import PROBLEM_RESPONSES
from ..services.booking_service import BookingService

router = APIRouter(prefix="/v1/booking", tags=["booking"], responses=PROBLEM_RESPONSES)

BOOKING_SERVICE_DEPENDENCY = Depends(get_booking_service)


def _convert_booking_to_schema(booking_model) -> Booking:
    """Convert booking model to schema."""
    return Booking.model_validate(booking_model)


def _booking_response(booking_model, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=_convert_booking_to_schema(booking_model).model_dump(mode="json"),
    )


@router.post("/create", response_model=Booking, status_code=status.HTTP_201_CREATED)
async def create_booking(
    request: CreateBookingRequest,
    booking_service: BookingService = BOOKING_SERVICE_DEPENDENCY,
) -> JSONResponse:
    """
    Book a cargo shipment.

    Flight ids, when given, must all exist in the catalog.
    """
    booking = await booking_service.create_booking(
        origin=request.origin,
        destination=request.destination,
        pieces=request.pieces,
        weight_kg=request.weight_kg,
        flight_ids=request.flight_ids,
    )
    return _booking_response(booking, status.HTTP_201_CREATED)


@router.post("/get", response_model=Booking)
async def get_booking(
    request: GetBookingRequest,
    booking_service: BookingService = BOOKING_SERVICE_DEPENDENCY,
) -> JSONResponse:
    """Get booking details, including its timeline."""
    booking = await booking_service.get_booking(request.ref_id)
    return _booking_response(booking)


@router.post("/list", response_model=ListBookingsResponse)
async def list_bookings(
    request: ListBookingsRequest,
    booking_service: BookingService = BOOKING_SERVICE_DEPENDENCY,
) -> JSONResponse:
    """List every booking, newest first."""
    bookings = await booking_service.list_bookings()
    response_data = ListBookingsResponse(
        items=[_convert_booking_to_schema(booking) for booking in bookings]
    )
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.post("/depart", response_model=Booking)
async def depart_booking(
    request: DepartBookingRequest,
    booking_service: BookingService = BOOKING_SERVICE_DEPENDENCY,
) -> JSONResponse:
    """
    Mark a booked shipment as departed.

    Location defaults to the booking origin.
    """
    booking = await booking_service.depart(
        request.ref_id,
        location=request.location,
        flight_info=request.flight_info,
    )
    return _booking_response(booking)


@router.post("/arrive", response_model=Booking)
async def arrive_booking(
    request: ArriveBookingRequest,
    booking_service: BookingService = BOOKING_SERVICE_DEPENDENCY,
) -> JSONResponse:
    """
    Mark a departed shipment as arrived.

    Location defaults to the booking destination.
    """
    booking = await booking_service.arrive(request.ref_id, location=request.location)
    return _booking_response(booking)


@router.post("/deliver", response_model=Booking)
async def deliver_booking(
    request: DeliverBookingRequest,
    booking_service: BookingService = BOOKING_SERVICE_DEPENDENCY,
) -> JSONResponse:
    """
    Mark an arrived shipment as delivered.

    Location defaults to the booking destination.
    """
    booking = await booking_service.deliver(request.ref_id, location=request.location)
    return _booking_response(booking)


@router.post("/cancel", response_model=Booking)
async def cancel_booking(
    request: CancelBookingRequest,
    booking_service: BookingService = BOOKING_SERVICE_DEPENDENCY,
) -> JSONResponse:
    """
    Cancel a shipment.

    Only bookings that are still booked or in flight can be cancelled.
    """
    booking = await booking_service.cancel(request.ref_id)
    return _booking_response(booking)
