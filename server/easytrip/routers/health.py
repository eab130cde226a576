"""Health check router."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..core.config import settings
from ..core.observability import SERVICE_NAME, SERVICE_VERSION
from ..schemas.health import DatabaseHealth, DatabaseStatus, HealthResponse, HealthStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


async def _database_status(request: Request) -> DatabaseStatus:
    database = getattr(request.app.state, "database", None)
    if database is None or not await database.ensure_connected():
        return DatabaseStatus.DISCONNECTED
    if await database.ping():
        return DatabaseStatus.CONNECTED
    return DatabaseStatus.DISCONNECTED


@router.get("/", response_model=HealthResponse)
@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> JSONResponse:
    """
    Health check endpoint.

    Always answers 200; an unreachable store shows up as ``degraded``.
    """
    db_status = await _database_status(request)
    healthy = db_status is DatabaseStatus.CONNECTED

    response_data = HealthResponse(
        message="EasyTrip API is running",
        status=HealthStatus.HEALTHY if healthy else HealthStatus.DEGRADED,
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        environment=settings.environment,
        database=DatabaseHealth(status=db_status),
        timestamp=datetime.now(timezone.utc),
    )

    logger.debug(
        "Health check requested",
        extra={"status": response_data.status.value, "database": db_status.value},
    )

    return JSONResponse(
        status_code=200,
        content=response_data.model_dump(mode="json")
    )
