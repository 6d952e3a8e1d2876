"""Health check router."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.observability import SERVICE_NAME, SERVICE_VERSION
from ..schemas.health import HealthResponse, HealthStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/health", tags=["health"])


@router.post("/ping", response_model=HealthResponse)
async def health_ping(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    """
    Health check endpoint.

    Returns current service status, timestamp and database reachability.
    """
    try:
        await db.execute(text("SELECT 1"))
        database, health = "ok", HealthStatus.HEALTHY
    except SQLAlchemyError as e:
        logger.warning("Database ping failed", extra={"error": str(e)})
        database, health = "unreachable", HealthStatus.DEGRADED

    response_data = HealthResponse(
        status=health,
        service=SERVICE_NAME,
        timestamp=datetime.now(timezone.utc),
        version=SERVICE_VERSION,
        database=database,
    )

    logger.debug(
        "Health check requested",
        extra={
            "status": response_data.status.value,
            "database": database,
        }
    )

    return JSONResponse(
        status_code=200,
        content=response_data.model_dump(mode="json")
    )
