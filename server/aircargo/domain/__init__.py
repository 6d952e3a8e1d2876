"""Domain rules: booking lifecycle and itinerary ranking."""

from .lifecycle import TRANSITIONS, BookingAction, Transition, allowed_actions, next_status
from .routing import RouteSearchResult, TransitRoute, rank_transit_routes

__all__ = [
    "TRANSITIONS",
    "BookingAction",
    "Transition",
    "allowed_actions",
    "next_status",
    "RouteSearchResult",
    "TransitRoute",
    "rank_transit_routes",
]
