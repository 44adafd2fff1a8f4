"""Health check endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status
from pydantic import BaseModel

from payroll_advances.api.dependencies import Ledger
from payroll_advances.ledger import ADVANCES_KEY

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    storage: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
)
async def health_check(ledger: Ledger) -> HealthResponse:
    """Check API and ledger storage health."""
    storage_status = "unhealthy"
    try:
        ledger.storage.store.get(ADVANCES_KEY)
        storage_status = "healthy"
    except Exception:
        logger.exception("Ledger storage health probe failed")

    return HealthResponse(
        status="healthy" if storage_status == "healthy" else "degraded",
        timestamp=datetime.now(timezone.utc),
        storage=storage_status,
    )


@router.get("/ready", status_code=status.HTTP_200_OK)
async def readiness_check() -> dict[str, str]:
    """Readiness check for container orchestration."""
    return {"status": "ready"}


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_check() -> dict[str, str]:
    """Liveness check for container orchestration."""
    return {"status": "alive"}
