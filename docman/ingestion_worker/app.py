"""
Ingestion worker HTTP application.

Routes:
- POST /ingestion             start a job ({id, ...payload})
- GET  /status/{id}           authoritative status
- GET  /cancel|pause|resume|retry/{id}
- GET  /embedding/{id}        placeholder embedding
- GET  /health

Dependencies: fastapi, uvicorn, docman.ingestion_worker.engine
System role: RPC surface of the reference ingestion worker
"""

from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse

from docman.configs import get_settings
from docman.core.exceptions import InvalidTransitionError
from docman.ingestion_worker.engine import IngestionWorkerEngine
from docman.models.health import HealthResponse
from docman.models.ingestion import WorkerStartRequest, WorkerStatusResponse
from docman.observability.logger import configure_logging
from docman.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


def build_engine() -> IngestionWorkerEngine:
    """Create an engine from the simulation settings."""
    sim = get_settings().simulation
    return IngestionWorkerEngine(
        min_delay_seconds=sim.min_delay_seconds,
        max_delay_seconds=sim.max_delay_seconds,
        strict_transitions=sim.strict_transitions,
        embedding=sim.embedding,
    )


def get_engine(request: Request) -> IngestionWorkerEngine:
    """FastAPI dependency returning the app's engine."""
    return request.app.state.engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Worker lifespan.

    Cancels every armed completion task on shutdown.
    """
    configure_logging(get_settings().log_level)
    logger.info("Ingestion worker started")
    yield
    await app.state.engine.aclose()
    logger.info("Ingestion worker stopped")


async def invalid_transition_handler(request: Request, exc: InvalidTransitionError) -> JSONResponse:
    """Map a rejected control event to 409 with the worker's current status."""
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "detail": {
                "message": exc.message,
                "current_status": exc.current_status,
                "event": exc.event,
            }
        },
    )


def create_worker_app(engine: IngestionWorkerEngine | None = None) -> FastAPI:
    """
    Create the worker application.

    Args:
        engine: Engine to serve; built from settings when omitted

    Returns:
        FastAPI: Configured worker application
    """
    app = FastAPI(
        title="Ingestion Worker",
        description="Reference ingestion worker with simulated asynchronous completion",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.engine = engine or build_engine()

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)
    app.add_exception_handler(InvalidTransitionError, invalid_transition_handler)

    @app.post("/ingestion", response_model=WorkerStatusResponse)
    async def start_ingestion(
        request: WorkerStartRequest,
        engine: IngestionWorkerEngine = Depends(get_engine),
    ) -> WorkerStatusResponse:
        """Start ingestion for request.id."""
        return WorkerStatusResponse(status=await engine.start(request.id))

    @app.get("/status/{job_id}", response_model=WorkerStatusResponse)
    async def get_status(
        job_id: str,
        engine: IngestionWorkerEngine = Depends(get_engine),
    ) -> WorkerStatusResponse:
        """Authoritative status for a job."""
        return WorkerStatusResponse(status=await engine.status(job_id))

    @app.get("/cancel/{job_id}", response_model=WorkerStatusResponse)
    async def cancel_ingestion(
        job_id: str,
        engine: IngestionWorkerEngine = Depends(get_engine),
    ) -> WorkerStatusResponse:
        return WorkerStatusResponse(status=await engine.cancel(job_id))

    @app.get("/pause/{job_id}", response_model=WorkerStatusResponse)
    async def pause_ingestion(
        job_id: str,
        engine: IngestionWorkerEngine = Depends(get_engine),
    ) -> WorkerStatusResponse:
        return WorkerStatusResponse(status=await engine.pause(job_id))

    @app.get("/resume/{job_id}", response_model=WorkerStatusResponse)
    async def resume_ingestion(
        job_id: str,
        engine: IngestionWorkerEngine = Depends(get_engine),
    ) -> WorkerStatusResponse:
        return WorkerStatusResponse(status=await engine.resume(job_id))

    @app.get("/retry/{job_id}", response_model=WorkerStatusResponse)
    async def retry_ingestion(
        job_id: str,
        engine: IngestionWorkerEngine = Depends(get_engine),
    ) -> WorkerStatusResponse:
        return WorkerStatusResponse(status=await engine.retry(job_id))

    @app.get("/embedding/{job_id}")
    async def get_embedding(
        job_id: str,
        engine: IngestionWorkerEngine = Depends(get_engine),
    ) -> list[float]:
        """Placeholder embedding for a job."""
        return engine.embedding(job_id)

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        return HealthResponse(message="Worker Healthy")

    return app


if __name__ == "__main__":
    uvicorn.run(
        "docman.ingestion_worker.app:create_worker_app",
        factory=True,
        host="0.0.0.0",
        port=3000,
    )
