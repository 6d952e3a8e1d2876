"""Flight model definition."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base


class Flight(Base):
    """Scheduled flight leg in the catalog. Read-only to the booking core."""

    __tablename__ = "flights"

    # Surrogate key; flight_id is the external identity
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    flight_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    flight_number: Mapped[str] = mapped_column(String(16), nullable=False)
    airline_name: Mapped[str] = mapped_column(String(128), nullable=False)

    origin: Mapped[str] = mapped_column(String(8), nullable=False)
    destination: Mapped[str] = mapped_column(String(8), nullable=False)
    departure_date_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    arrival_date_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    __table_args__ = (
        CheckConstraint("arrival_date_time > departure_date_time", name="ck_flight_arrival_after_departure"),
        CheckConstraint("length(origin) > 0", name="ck_flight_origin_not_empty"),
        CheckConstraint("length(destination) > 0", name="ck_flight_destination_not_empty"),
        Index("ix_flights_origin_departure", "origin", "departure_date_time"),
        Index("ix_flights_origin_destination_departure", "origin", "destination", "departure_date_time"),
    )

    def __repr__(self) -> str:
        return (
            f"<Flight(flight_id='{self.flight_id}', {self.origin}->{self.destination}, "
            f"departs={self.departure_date_time}, arrives={self.arrival_date_time})>"
        )
