"""Test configuration and fixtures."""

import os
from datetime import datetime, timedelta

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from aircargo.core.clock import ManualClock  # noqa: E402
from aircargo.core.database import Base, get_db  # noqa: E402
from aircargo.core.dependencies import get_clock  # noqa: E402
from aircargo.services.booking_service import BookingService  # noqa: E402
from tests.factories import make_flight, seed_flights  # noqa: E402

# Test database URL (in-memory SQLite for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

CLOCK_START = datetime(2024, 5, 1, 6, 0, 0)


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session(test_engine):
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def clock():
    """Deterministic clock advancing one second per reading."""
    return ManualClock(CLOCK_START, step=timedelta(seconds=1))


@pytest.fixture
def booking_service(test_session, clock):
    return BookingService(test_session, clock=clock)


@pytest_asyncio.fixture(scope="function")
async def catalog(test_session):
    """The DEL/BOM/HYD catalog used throughout the search and booking tests."""
    day = datetime(2024, 5, 1)
    flights = [
        make_flight("AI101-0501", "DEL", "BOM", day.replace(hour=9), day.replace(hour=11)),
        make_flight("6E201-0501", "DEL", "HYD", day.replace(hour=6), day.replace(hour=8)),
        make_flight("6E301-0501", "HYD", "BOM", day.replace(hour=9, minute=30), day.replace(hour=11)),
    ]
    return await seed_flights(test_session, flights)


@pytest_asyncio.fixture(scope="function")
async def test_app(test_session, clock):
    """Create the FastAPI application wired to the test session and clock."""
    from aircargo.main import create_app

    app = create_app()

    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_booking_data():
    """Sample booking payload for testing."""
    return {
        "origin": "DEL",
        "destination": "BOM",
        "pieces": 3,
        "weight_kg": 42.5,
    }
