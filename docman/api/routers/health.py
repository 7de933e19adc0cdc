"""
Liveness probe for the orchestrator API.

Does not touch the record store or the worker; a degraded worker shows up
as stale statuses and 502s on the ingestion routes instead.

Routes: GET /health
"""

from fastapi import APIRouter

from docman.models.health import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(message="Server Healthy")
