"""Itinerary search over the flight catalog."""

import logging
from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import ValidationError
from ..core.observability import metrics_collector
from ..domain.routing import (
    RouteSearchResult,
    TransitRoute,
    connection_window,
    day_window,
    pair_connections,
    rank_transit_routes,
)
from ..repositories.flight_repository import FlightCatalog

logger = logging.getLogger(__name__)


class RouteSearchService:
    """Finds direct and one-stop routes between two airports on a date."""

    def __init__(
        self,
        db: AsyncSession,
        catalog: FlightCatalog | None = None,
        route_limit: int | None = None,
        max_layover: timedelta | None = None,
    ):
        self.db = db
        self.catalog = catalog or FlightCatalog(db)
        self.route_limit = settings.transit_route_limit if route_limit is None else route_limit
        self.max_layover = (
            timedelta(days=settings.transit_max_layover_days) if max_layover is None else max_layover
        )

    async def find_routes(
        self,
        origin: str | None,
        destination: str | None,
        departure_date: date | None,
    ) -> RouteSearchResult:
        """
        Search routes departing ``origin`` on ``departure_date``.

        Direct flights are returned in departure order and are not limited.
        One-stop routes connect within the layover window after the first
        leg lands, are ranked by total elapsed time and truncated to the
        configured limit.

        Raises:
            ValidationError: If origin, destination or departure_date is missing
        """
        missing = [
            name for name, value in (
                ("origin", origin),
                ("destination", destination),
                ("departure_date", departure_date),
            )
            if value is None or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise ValidationError(
                detail=f"Missing required parameters: {', '.join(missing)}",
                violations=[{"path": name, "message": f"{name} is required"} for name in missing],
            )

        start, end = day_window(departure_date)

        direct_flights = await self.catalog.find_by_origin_destination_window(
            origin, destination, start, end
        )

        candidates: list[TransitRoute] = []
        first_legs = await self.catalog.find_by_origin_window(origin, destination, start, end)
        for first_leg in first_legs:
            window_start, window_end = connection_window(first_leg, self.max_layover)
            onward = await self.catalog.find_by_origin_destination_window(
                first_leg.destination, destination, window_start, window_end
            )
            candidates.extend(pair_connections(first_leg, onward, destination, self.max_layover))

        transit_routes = rank_transit_routes(candidates, self.route_limit)

        metrics_collector.record_route_search(len(direct_flights), len(transit_routes))
        logger.info(
            "Route search completed",
            extra={
                "origin": origin,
                "destination": destination,
                "departure_date": departure_date.isoformat(),
                "direct_count": len(direct_flights),
                "first_leg_count": len(first_legs),
                "transit_candidates": len(candidates),
                "transit_returned": len(transit_routes),
            }
        )

        return RouteSearchResult(direct_flights=direct_flights, transit_routes=transit_routes)
