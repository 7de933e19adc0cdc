"""
Ingestion API endpoints.

Routes:
- POST /ingestion - Create ingestion job
- GET /ingestion/{id}/status - Best known status (synced with worker)
- POST /ingestion/{id}/cancel|pause|resume|retry - Control actions
- GET /ingestion/{id}/embed - Document embedding

Dependencies: docman.application.services, docman.models
System role: Ingestion HTTP API
"""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends

from docman.api.deps import get_ingestion_orchestrator
from docman.application.services.ingestion_orchestrator import IngestionOrchestrator
from docman.models.ingestion import ControlResult, RemoteStartResult, RemoteStatusResult

from .error_handling import handle_ingestion_errors

router = APIRouter(prefix="/ingestion", tags=["ingestion"])


@router.post("", response_model=RemoteStartResult, status_code=201)
@handle_ingestion_errors
async def create_ingestion(
    payload: dict[str, Any] = Body(...),
    orchestrator: IngestionOrchestrator = Depends(get_ingestion_orchestrator),
) -> RemoteStartResult:
    """
    Create an ingestion job and start it on the worker.

    Returns the worker's start response together with the new job id.

    Raises:
        HTTPException(502): Worker unreachable; job stays Pending (id in detail)
    """
    return await orchestrator.create_job(payload)


@router.get("/{job_id}/status", response_model=RemoteStatusResult)
@handle_ingestion_errors
async def get_ingestion_status(
    job_id: UUID,
    orchestrator: IngestionOrchestrator = Depends(get_ingestion_orchestrator),
) -> RemoteStatusResult:
    """
    Get the best known status for a job.

    stale=true means the worker did not confirm the status on this call.

    Raises:
        HTTPException(404): No local record
    """
    return await orchestrator.get_status(job_id)


@router.post("/{job_id}/cancel", response_model=ControlResult)
@handle_ingestion_errors
async def cancel_ingestion(
    job_id: UUID,
    orchestrator: IngestionOrchestrator = Depends(get_ingestion_orchestrator),
) -> ControlResult:
    """Cancel ingestion."""
    return await orchestrator.cancel(job_id)


@router.post("/{job_id}/pause", response_model=ControlResult)
@handle_ingestion_errors
async def pause_ingestion(
    job_id: UUID,
    orchestrator: IngestionOrchestrator = Depends(get_ingestion_orchestrator),
) -> ControlResult:
    """Pause ingestion."""
    return await orchestrator.pause(job_id)


@router.post("/{job_id}/resume", response_model=ControlResult)
@handle_ingestion_errors
async def resume_ingestion(
    job_id: UUID,
    orchestrator: IngestionOrchestrator = Depends(get_ingestion_orchestrator),
) -> ControlResult:
    """Resume ingestion."""
    return await orchestrator.resume(job_id)


@router.post("/{job_id}/retry", response_model=ControlResult)
@handle_ingestion_errors
async def retry_ingestion(
    job_id: UUID,
    orchestrator: IngestionOrchestrator = Depends(get_ingestion_orchestrator),
) -> ControlResult:
    """Retry a failed ingestion."""
    return await orchestrator.retry(job_id)


@router.get("/{job_id}/embed", response_model=list[float])
@handle_ingestion_errors
async def get_document_embedding(
    job_id: UUID,
    orchestrator: IngestionOrchestrator = Depends(get_ingestion_orchestrator),
) -> list[float]:
    """Get the document embedding for a job."""
    return await orchestrator.get_embedding(job_id)
