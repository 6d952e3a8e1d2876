"""Pure helpers for building and ranking itineraries.

Nothing here touches the database: callers supply flights already
narrowed by the catalog queries, which keeps the ranking rules testable
on plain in-memory objects.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable

from ..models.flight import Flight


@dataclass(frozen=True)
class TransitRoute:
    """Two legs sharing an intermediate airport."""

    first_flight: Flight
    second_flight: Flight

    @property
    def via(self) -> str:
        return self.first_flight.destination

    @property
    def total_duration(self) -> timedelta:
        return self.second_flight.arrival_date_time - self.first_flight.departure_date_time


@dataclass(frozen=True)
class RouteSearchResult:
    direct_flights: list[Flight]
    transit_routes: list[TransitRoute]


def day_window(departure_date: date) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` covering one calendar day."""
    start = datetime.combine(departure_date, time.min)
    return start, start + timedelta(days=1)


def connection_window(first_leg: Flight, max_layover: timedelta) -> tuple[datetime, datetime]:
    """Half-open window in which a connecting leg may depart."""
    return first_leg.arrival_date_time, first_leg.arrival_date_time + max_layover


def connects(first_leg: Flight, second_leg: Flight, max_layover: timedelta) -> bool:
    """True when ``second_leg`` is a valid onward connection from ``first_leg``."""
    start, end = connection_window(first_leg, max_layover)
    return (
        second_leg.origin == first_leg.destination
        and start <= second_leg.departure_date_time < end
    )


def pair_connections(
    first_leg: Flight,
    candidates: Iterable[Flight],
    destination: str,
    max_layover: timedelta,
) -> list[TransitRoute]:
    """Every route formed by ``first_leg`` and a qualifying candidate."""
    return [
        TransitRoute(first_flight=first_leg, second_flight=second_leg)
        for second_leg in candidates
        if second_leg.destination == destination and connects(first_leg, second_leg, max_layover)
    ]


def rank_transit_routes(routes: Iterable[TransitRoute], limit: int) -> list[TransitRoute]:
    """Shortest total duration first, at most ``limit`` entries.

    The sort is stable, so routes of equal duration keep the order in
    which their first legs were discovered.
    """
    return sorted(routes, key=lambda route: route.total_duration)[:limit]
