"""Flight router for catalog browsing and itinerary search."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..core.dependencies import get_flight_service, get_route_search_service
from ..domain.routing import TransitRoute as TransitRouteResult
from ..schemas.common import PROBLEM_RESPONSES
from ..schemas.flight import (
    CreateFlightRequest,
    Flight,
    ListFlightsRequest,
    ListFlightsResponse,
    SearchRoutesRequest,
    SearchRoutesResponse,
    TransitRoute,
)
from ..services.flight_service import FlightService
from ..services.route_service import RouteSearchService

router = APIRouter(prefix="/v1/flight", tags=["flight"], responses=PROBLEM_RESPONSES)

FLIGHT_SERVICE_DEPENDENCY = Depends(get_flight_service)
ROUTE_SERVICE_DEPENDENCY = Depends(get_route_search_service)


def _convert_flight_to_schema(flight_model) -> Flight:
    """Convert flight model to schema."""
    return Flight.model_validate(flight_model)


def _convert_route_to_schema(route: TransitRouteResult) -> TransitRoute:
    """Convert a ranked one-stop route to schema."""
    total_ms = int(route.total_duration.total_seconds() * 1000)
    return TransitRoute(
        first_flight=_convert_flight_to_schema(route.first_flight),
        second_flight=_convert_flight_to_schema(route.second_flight),
        via=route.via,
        total_duration_ms=total_ms,
        total_duration_minutes=total_ms // 60000,
    )


@router.post("/routes", response_model=SearchRoutesResponse)
async def search_routes(
    request: SearchRoutesRequest,
    route_service: RouteSearchService = ROUTE_SERVICE_DEPENDENCY,
) -> JSONResponse:
    """
    Find direct and one-stop routes for a departure date.

    One-stop routes are ranked by total duration and limited to the best few.
    """
    result = await route_service.find_routes(
        request.origin, request.destination, request.departure_date
    )
    response_data = SearchRoutesResponse(
        direct_flights=[_convert_flight_to_schema(flight) for flight in result.direct_flights],
        transit_routes=[_convert_route_to_schema(route) for route in result.transit_routes],
    )
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.post("/create", response_model=Flight, status_code=status.HTTP_201_CREATED)
async def create_flight(
    request: CreateFlightRequest,
    flight_service: FlightService = FLIGHT_SERVICE_DEPENDENCY,
) -> JSONResponse:
    """Add a flight to the catalog (administration and testing)."""
    flight = await flight_service.create_flight(request)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=_convert_flight_to_schema(flight).model_dump(mode="json"),
    )


@router.post("/list", response_model=ListFlightsResponse)
async def list_flights(
    request: ListFlightsRequest,
    flight_service: FlightService = FLIGHT_SERVICE_DEPENDENCY,
) -> JSONResponse:
    """List catalog flights ordered by departure."""
    flights = await flight_service.list_flights(request.limit)
    response_data = ListFlightsResponse(items=[_convert_flight_to_schema(f) for f in flights])
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))
