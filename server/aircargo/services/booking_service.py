"""Booking service: creation and lifecycle transitions."""

import logging
import math
import secrets
import string
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.clock import Clock, system_clock
from ..core.config import settings
from ..core.exceptions import (
    ConflictError,
    DuplicateRefIdError,
    InvalidReferenceError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from ..core.observability import metrics_collector
from ..domain.lifecycle import BookingAction, resolve_location, transition_for
from ..models.booking import Booking, BookingStatus, TimelineEvent
from ..repositories.booking_repository import BookingStore
from ..repositories.flight_repository import FlightCatalog

logger = logging.getLogger(__name__)

MAX_FLIGHTS_PER_BOOKING = 2


class BookingService:
    """Service owning the booking state machine and its timeline."""

    def __init__(
        self,
        db: AsyncSession,
        clock: Clock = system_clock,
        store: BookingStore | None = None,
        catalog: FlightCatalog | None = None,
    ):
        self.db = db
        self.clock = clock
        self.store = store or BookingStore(db)
        self.catalog = catalog or FlightCatalog(db)

    def _generate_ref_id(self, now: datetime) -> str:
        """Timestamp plus a random suffix, e.g. ``REF-1714554000000-7KQ2ZD``."""
        millis = int(now.replace(tzinfo=timezone.utc).timestamp() * 1000)
        alphabet = string.ascii_uppercase + string.digits
        suffix = ''.join(secrets.choice(alphabet) for _ in range(6))
        return f"REF-{millis}-{suffix}"

    @staticmethod
    def _validate_shipment(
        origin: str | None,
        destination: str | None,
        pieces: int | None,
        weight_kg: float | None,
        flight_ids: Sequence[str],
    ) -> None:
        violations = []
        if not origin or not origin.strip():
            violations.append({"path": "origin", "message": "origin is required"})
        if not destination or not destination.strip():
            violations.append({"path": "destination", "message": "destination is required"})
        if pieces is None or isinstance(pieces, bool) or pieces <= 0:
            violations.append({"path": "pieces", "message": "pieces must be a positive integer"})
        if weight_kg is None or not math.isfinite(weight_kg) or weight_kg <= 0:
            violations.append({"path": "weight_kg", "message": "weight_kg must be a positive finite number"})
        if len(flight_ids) > MAX_FLIGHTS_PER_BOOKING:
            violations.append({
                "path": "flight_ids",
                "message": f"at most {MAX_FLIGHTS_PER_BOOKING} flights may be booked",
            })
        elif len(set(flight_ids)) != len(flight_ids):
            violations.append({"path": "flight_ids", "message": "flight_ids must not repeat a flight"})

        if violations:
            raise ValidationError(
                detail="Missing or invalid booking fields: "
                + ", ".join(v["path"] for v in violations),
                violations=violations,
            )

    async def create_booking(
        self,
        origin: str | None,
        destination: str | None,
        pieces: int | None,
        weight_kg: float | None,
        flight_ids: Sequence[str] | None = None,
    ) -> Booking:
        """
        Create a booking in BOOKED status with an empty timeline.

        Returns:
            Created booking entity

        Raises:
            ValidationError: If a shipment field is missing or non-positive
            InvalidReferenceError: If a flight id does not resolve
            DuplicateRefIdError: If no unique reference could be generated
        """
        flight_ids = list(flight_ids or [])
        self._validate_shipment(origin, destination, pieces, weight_kg, flight_ids)

        if flight_ids:
            found = await self.catalog.find_by_ids(flight_ids)
            known = {flight.flight_id for flight in found}
            missing = [flight_id for flight_id in flight_ids if flight_id not in known]
            if missing:
                logger.warning(
                    "Booking creation failed - unknown flights",
                    extra={"flight_ids": flight_ids, "missing_flight_ids": missing}
                )
                raise InvalidReferenceError(missing_flight_ids=missing)

        last_error: DuplicateRefIdError | None = None
        for attempt in range(1, settings.ref_id_max_attempts + 1):
            now = self.clock.now()
            booking = Booking(
                ref_id=self._generate_ref_id(now),
                origin=origin.strip(),
                destination=destination.strip(),
                pieces=int(pieces),
                weight_kg=float(weight_kg),
                flight_ids=flight_ids,
                status=BookingStatus.BOOKED.value,
                created_at=now,
                updated_at=now,
            )
            try:
                booking = await self.store.insert(booking)
            except DuplicateRefIdError as e:
                logger.warning(
                    "Booking reference collision - regenerating",
                    extra={"ref_id": e.ref_id, "attempt": attempt}
                )
                last_error = e
                continue

            metrics_collector.record_booking_created()
            logger.info(
                "Booking created successfully",
                extra={
                    "ref_id": booking.ref_id,
                    "origin": booking.origin,
                    "destination": booking.destination,
                    "pieces": booking.pieces,
                    "weight_kg": booking.weight_kg,
                    "flight_ids": booking.flight_ids,
                }
            )
            return booking

        raise DuplicateRefIdError(last_error.ref_id, attempts=settings.ref_id_max_attempts)

    async def depart(
        self,
        ref_id: str,
        location: str | None = None,
        flight_info: str | None = None,
    ) -> Booking:
        """Mark a BOOKED shipment as departed."""
        return await self._apply(BookingAction.DEPART, ref_id, location, flight_info or "")

    async def arrive(self, ref_id: str, location: str | None = None) -> Booking:
        """Mark a DEPARTED shipment as arrived."""
        return await self._apply(BookingAction.ARRIVE, ref_id, location)

    async def deliver(self, ref_id: str, location: str | None = None) -> Booking:
        """Mark an ARRIVED shipment as delivered."""
        return await self._apply(BookingAction.DELIVER, ref_id, location)

    async def cancel(self, ref_id: str) -> Booking:
        """Cancel a shipment that has not yet arrived."""
        return await self._apply(BookingAction.CANCEL, ref_id)

    async def _apply(
        self,
        action: BookingAction,
        ref_id: str,
        location: str | None = None,
        flight_info: str | None = None,
    ) -> Booking:
        """
        Run one transition as a conditional write.

        Raises:
            NotFoundError: If the booking does not exist
            InvalidStateError: If the transition is illegal from the current status
            ConflictError: If a concurrent transition won the race
        """
        transition = transition_for(action)
        booking = await self.get_booking(ref_id)
        current = BookingStatus(booking.status)

        if current not in transition.allowed_from:
            metrics_collector.record_transition_rejected(action.value, "invalid_state")
            logger.warning(
                "Booking transition rejected",
                extra={
                    "ref_id": ref_id,
                    "action": action.value,
                    "current_status": current.value,
                }
            )
            raise InvalidStateError(
                ref_id=ref_id,
                action=action.value,
                current_status=current.value,
                allowed_from=sorted(status.value for status in transition.allowed_from),
            )

        now = self.clock.now()
        event = TimelineEvent(
            event_type=transition.target.value,
            location=resolve_location(transition, booking, location),
            flight_info=flight_info if action is BookingAction.DEPART else None,
            notes=transition.notes,
            timestamp=now,
        )

        try:
            updated = await self.store.atomic_update(
                ref_id=ref_id,
                expected_status=current,
                new_status=transition.target,
                event=event,
                updated_at=now,
            )
        except ConflictError:
            metrics_collector.record_transition_rejected(action.value, "conflict")
            raise

        metrics_collector.record_transition(action.value, transition.target.value)
        logger.info(
            "Booking transition applied",
            extra={
                "ref_id": ref_id,
                "action": action.value,
                "from_status": current.value,
                "to_status": transition.target.value,
                "location": event.location,
            }
        )
        return updated

    async def get_booking(self, ref_id: str) -> Booking:
        """
        Get booking by reference.

        Raises:
            NotFoundError: If booking not found
        """
        if not ref_id or not ref_id.strip():
            raise ValidationError(
                detail="ref_id is required",
                violations=[{"path": "ref_id", "message": "ref_id is required"}],
            )

        booking = await self.store.find_by_ref_id(ref_id)
        if not booking:
            logger.warning(
                "Booking not found",
                extra={"ref_id": ref_id}
            )
            raise NotFoundError(
                resource_type="booking",
                resource_id=ref_id
            )
        return booking

    async def list_bookings(self) -> list[Booking]:
        """All bookings, newest first."""
        bookings = await self.store.find_all()
        logger.debug("Bookings listed", extra={"count": len(bookings)})
        return bookings
