"""Booking and timeline model definitions."""

from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, CheckConstraint, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base


class BookingStatus(str, Enum):
    """Booking status enumeration."""
    BOOKED = "BOOKED"
    DEPARTED = "DEPARTED"
    ARRIVED = "ARRIVED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class Booking(Base):
    """Cargo booking tracked from booking through delivery."""

    __tablename__ = "bookings"

    # Surrogate key; also the tie-breaker for bookings created in the same instant
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    ref_id: Mapped[str] = mapped_column(String(40), nullable=False, unique=True, index=True)

    # Shipment details (immutable after creation)
    origin: Mapped[str] = mapped_column(String(8), nullable=False)
    destination: Mapped[str] = mapped_column(String(8), nullable=False)
    pieces: Mapped[int] = mapped_column(Integer, nullable=False)
    weight_kg: Mapped[float] = mapped_column(Float, nullable=False)
    flight_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=BookingStatus.BOOKED.value,
        index=True
    )

    # Timestamps come from the service clock, not the database
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    __table_args__ = (
        CheckConstraint("pieces > 0", name="ck_booking_pieces_positive"),
        CheckConstraint("weight_kg > 0", name="ck_booking_weight_positive"),
        CheckConstraint("length(ref_id) > 0", name="ck_booking_ref_id_not_empty"),
        CheckConstraint(
            "status IN ('BOOKED', 'DEPARTED', 'ARRIVED', 'DELIVERED', 'CANCELLED')",
            name="ck_booking_status_known",
        ),
    )

    timeline: Mapped[list["TimelineEvent"]] = relationship(
        "TimelineEvent",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="TimelineEvent.id",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(ref_id='{self.ref_id}', {self.origin}->{self.destination}, "
            f"pieces={self.pieces}, weight_kg={self.weight_kg}, status={self.status})>"
        )


class TimelineEvent(Base):
    """Append-only audit entry written on every status transition."""

    __tablename__ = "timeline_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    booking_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    event_type: Mapped[str] = mapped_column(String(20), nullable=False)
    location: Mapped[str] = mapped_column(String(64), nullable=False)
    flight_info: Mapped[str | None] = mapped_column(String(128), nullable=True)
    notes: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    booking: Mapped["Booking"] = relationship("Booking", back_populates="timeline")

    def __repr__(self) -> str:
        return (
            f"<TimelineEvent(booking_id={self.booking_id}, event_type={self.event_type}, "
            f"location='{self.location}', timestamp={self.timestamp})>"
        )
