"""Persistence for the booking aggregate."""

import logging
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ConflictError, DuplicateRefIdError
from ..models.booking import Booking, BookingStatus, TimelineEvent

logger = logging.getLogger(__name__)


class BookingStore:
    """Create, read and conditionally update bookings by reference.

    Updates are compare-and-swap writes keyed on ``(ref_id, status)``: the
    status change and its timeline entry commit together or not at all,
    and a writer whose expected status is stale gets ``ConflictError``
    instead of overwriting the winner.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, booking: Booking) -> Booking:
        """
        Persist a new booking.

        Raises:
            DuplicateRefIdError: If the reference is already taken
        """
        ref_id = booking.ref_id
        self.db.add(booking)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateRefIdError(ref_id) from e
        return await self._reload(ref_id)

    async def find_by_ref_id(self, ref_id: str) -> Booking | None:
        stmt = select(Booking).where(Booking.ref_id == ref_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def find_all(self) -> list[Booking]:
        """All bookings, newest first."""
        stmt = select(Booking).order_by(Booking.created_at.desc(), Booking.id.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars())

    async def atomic_update(
        self,
        ref_id: str,
        expected_status: BookingStatus,
        new_status: BookingStatus,
        event: TimelineEvent,
        updated_at: datetime,
    ) -> Booking:
        """
        Move a booking from ``expected_status`` to ``new_status`` and append ``event``.

        Raises:
            ConflictError: If the booking is no longer in ``expected_status``
        """
        stmt = (
            update(Booking)
            .where(Booking.ref_id == ref_id, Booking.status == expected_status.value)
            .values(status=new_status.value, updated_at=updated_at)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.db.execute(stmt)
            if result.rowcount != 1:
                await self.db.rollback()
                raise self._conflict(ref_id, expected_status, new_status)

            booking_id = (
                await self.db.execute(select(Booking.id).where(Booking.ref_id == ref_id))
            ).scalar_one()
            event.booking_id = booking_id
            self.db.add(event)
            await self.db.commit()
        except OperationalError as e:
            # Lock contention with a concurrent writer
            await self.db.rollback()
            raise self._conflict(ref_id, expected_status, new_status) from e

        return await self._reload(ref_id)

    @staticmethod
    def _conflict(
        ref_id: str,
        expected_status: BookingStatus,
        new_status: BookingStatus,
    ) -> ConflictError:
        logger.warning(
            "Conditional booking update lost a race",
            extra={
                "ref_id": ref_id,
                "expected_status": expected_status.value,
                "new_status": new_status.value,
            }
        )
        return ConflictError(
            detail=f"Booking {ref_id} changed concurrently; it is no longer {expected_status.value}",
            conflicting_resource={"ref_id": ref_id, "expected_status": expected_status.value},
        )

    async def _reload(self, ref_id: str) -> Booking:
        # Refresh identity-map copies so the timeline collection includes new rows
        stmt = (
            select(Booking)
            .where(Booking.ref_id == ref_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one()
