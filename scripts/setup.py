#!/usr/bin/env python3
"""Setup script for the air cargo API: migrate the database and load a sample flight catalog."""

import asyncio
import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add the server directory to the Python path
server_dir = Path(__file__).parent.parent / "server"
sys.path.insert(0, str(server_dir))

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
from sqlalchemy import func, select  # noqa: E402

from aircargo.core.database import async_session_factory, close_db  # noqa: E402
from aircargo.models import Flight  # noqa: E402

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# (flight number, airline, origin, destination, departure hour, departure minute, block minutes)
SAMPLE_SCHEDULE = [
    ("AI101", "Air India", "DEL", "BOM", 9, 0, 120),
    ("AI865", "Air India", "DEL", "BOM", 17, 30, 125),
    ("6E201", "IndiGo", "DEL", "HYD", 6, 0, 120),
    ("6E301", "IndiGo", "HYD", "BOM", 9, 30, 90),
    ("6E611", "IndiGo", "HYD", "BLR", 11, 15, 75),
    ("UK811", "Vistara", "BLR", "DEL", 7, 45, 165),
    ("UK846", "Vistara", "BOM", "BLR", 13, 0, 100),
    ("SG134", "SpiceJet", "DEL", "BLR", 20, 10, 170),
    ("SG402", "SpiceJet", "BLR", "BOM", 8, 20, 105),
]


def run_migrations():
    """Apply Alembic migrations up to head."""
    logger.info("Running database migrations...")
    alembic_cfg = Config(str(server_dir / "db" / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(server_dir / "db" / "alembic"))
    command.upgrade(alembic_cfg, "head")
    logger.info("Database migrations completed")


def build_catalog(start: datetime, days: int) -> list[Flight]:
    """Repeat the sample schedule daily for ``days`` days from ``start``."""
    flights = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        for number, airline, origin, destination, hour, minute, block in SAMPLE_SCHEDULE:
            departure = day.replace(hour=hour, minute=minute)
            flights.append(
                Flight(
                    flight_id=f"{number}-{day:%Y%m%d}",
                    flight_number=number,
                    airline_name=airline,
                    origin=origin,
                    destination=destination,
                    departure_date_time=departure,
                    arrival_date_time=departure + timedelta(minutes=block),
                )
            )
    return flights


async def create_sample_data(days: int = 7):
    """Load a week of flights unless the catalog already has some."""
    logger.info("Creating sample data...")

    async with async_session_factory() as db:
        try:
            existing = await db.execute(select(func.count()).select_from(Flight))
            if existing.scalar() > 0:
                logger.info("Sample data already exists, skipping...")
                return

            today = datetime.now(timezone.utc).replace(tzinfo=None, hour=0, minute=0, second=0, microsecond=0)
            db.add_all(build_catalog(today, days))
            await db.commit()
            logger.info(f"Sample catalog created: {days * len(SAMPLE_SCHEDULE)} flights")

        except Exception as e:
            await db.rollback()
            logger.error(f"Failed to create sample data: {e}")
            raise
    await close_db()


def main():
    """Main setup function."""
    logger.info("Starting air cargo API setup...")

    # Alembic's env.py drives its own event loop
    run_migrations()

    asyncio.run(create_sample_data())

    logger.info("Setup completed successfully!")
    logger.info("You can now start the API server with: cd server && uvicorn aircargo.main:app --reload")


if __name__ == "__main__":
    main()
