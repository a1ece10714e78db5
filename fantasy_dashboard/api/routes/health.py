"""
Health check endpoints.

We provide two endpoints:
- /health: Basic liveness check (is the process running?)
- /health/ready: Readiness check (can the database answer queries?)

The liveness check never touches the database, so a slow query
can't make the process look dead.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...infrastructure.sqlite.client import DatabaseError
from ..dependencies import ResultsRepositoryDep

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Liveness response."""
    status: str
    timestamp: str


class ReadinessCheck(BaseModel):
    """Individual readiness check result."""
    name: str
    status: str  # "ok" or "error"
    error: str | None = None
    details: dict[str, int] = {}


class ReadinessResponse(BaseModel):
    """Readiness check response with details."""
    status: str  # "ready" or "not_ready"
    checks: list[ReadinessCheck]


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns 200 if the service is running. Does not check the database.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness check",
    description="Returns 200 if the database answers queries, with row counts per table.",
    responses={
        503: {
            "description": "Service not ready",
            "model": ReadinessResponse,
        }
    },
)
def readiness_check(results: ResultsRepositoryDep):
    """
    Readiness check - can we serve traffic?

    Runs a cheap count over both tables. Empty tables are still ready:
    the dashboard is usable and waiting for an upload.
    """
    try:
        counts = results.counts()
        check = ReadinessCheck(name="database", status="ok", details=counts)
    except DatabaseError as e:
        logger.error("Database health check failed", extra={"error": str(e)})
        check = ReadinessCheck(name="database", status="error", error=str(e))

    if check.status == "ok":
        return ReadinessResponse(status="ready", checks=[check])

    logger.warning(
        "Readiness check failed",
        extra={"checks": [{"name": check.name, "status": check.status, "error": check.error}]}
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=ReadinessResponse(status="not_ready", checks=[check]).model_dump(),
    )
