"""Booking lifecycle state machine.

The legal moves are kept in one table so a rule change is a one-line diff::

    BOOKED --depart--> DEPARTED --arrive--> ARRIVED --deliver--> DELIVERED
    BOOKED --cancel--> CANCELLED
    DEPARTED --cancel--> CANCELLED

DELIVERED and CANCELLED are terminal.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from ..models.booking import Booking, BookingStatus


class BookingAction(str, Enum):
    """Operations that move a booking between statuses."""
    DEPART = "depart"
    ARRIVE = "arrive"
    DELIVER = "deliver"
    CANCEL = "cancel"


@dataclass(frozen=True)
class Transition:
    """One row of the transition table."""

    action: BookingAction
    allowed_from: frozenset[BookingStatus]
    target: BookingStatus
    notes: str
    default_location: Callable[[Booking], str]
    # Caller-supplied location wins over the default
    accepts_location: bool = True


TRANSITIONS: dict[BookingAction, Transition] = {
    BookingAction.DEPART: Transition(
        action=BookingAction.DEPART,
        allowed_from=frozenset({BookingStatus.BOOKED}),
        target=BookingStatus.DEPARTED,
        notes="Package departed",
        default_location=lambda booking: booking.origin,
    ),
    BookingAction.ARRIVE: Transition(
        action=BookingAction.ARRIVE,
        allowed_from=frozenset({BookingStatus.DEPARTED}),
        target=BookingStatus.ARRIVED,
        notes="Package arrived",
        default_location=lambda booking: booking.destination,
    ),
    BookingAction.DELIVER: Transition(
        action=BookingAction.DELIVER,
        allowed_from=frozenset({BookingStatus.ARRIVED}),
        target=BookingStatus.DELIVERED,
        notes="Package delivered successfully",
        default_location=lambda booking: booking.destination,
    ),
    BookingAction.CANCEL: Transition(
        action=BookingAction.CANCEL,
        allowed_from=frozenset({BookingStatus.BOOKED, BookingStatus.DEPARTED}),
        target=BookingStatus.CANCELLED,
        notes="Booking cancelled",
        default_location=lambda booking: booking.origin,
        accepts_location=False,
    ),
}

TERMINAL_STATUSES = frozenset({BookingStatus.DELIVERED, BookingStatus.CANCELLED})


def transition_for(action: BookingAction) -> Transition:
    return TRANSITIONS[BookingAction(action)]


def is_allowed(action: BookingAction, current: BookingStatus | str) -> bool:
    """True when ``action`` may be applied to a booking in ``current`` status."""
    return BookingStatus(current) in transition_for(action).allowed_from


def next_status(action: BookingAction, current: BookingStatus | str) -> BookingStatus | None:
    """Status reached by applying ``action``, or None when the move is illegal."""
    transition = transition_for(action)
    if BookingStatus(current) not in transition.allowed_from:
        return None
    return transition.target


def allowed_actions(current: BookingStatus | str) -> list[BookingAction]:
    """Actions that are legal from ``current``, in table order."""
    status = BookingStatus(current)
    return [action for action, transition in TRANSITIONS.items() if status in transition.allowed_from]


def resolve_location(transition: Transition, booking: Booking, location: str | None) -> str:
    if transition.accepts_location and location:
        return location
    return transition.default_location(booking)
