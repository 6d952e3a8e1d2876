"""FastAPI routers package."""

from .booking import router as booking_router
from .flight import router as flight_router
from .health import router as health_router
from .metrics import router as metrics_router

__all__ = [
    "booking_router",
    "flight_router",
    "health_router",
    "metrics_router",
]
