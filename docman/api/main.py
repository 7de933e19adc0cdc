"""
Orchestrator API application.

Mounts the health and ingestion routers under /api/v1 behind CORS,
correlation and request logging middleware.

Dependencies: fastapi, uvicorn, docman.api.routers
System role: API entry point
"""

from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docman.api import api_router
from docman.api.deps.dependencies import get_service_cache
from docman.boundary.db import create_tables, get_async_engine
from docman.configs import get_settings
from docman.observability.logger import configure_logging
from docman.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

API_PREFIX = "/api/v1"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Ensure tables on startup; close the worker client and engine on shutdown."""
    settings = get_settings()
    configure_logging(settings.log_level)

    await create_tables()
    logger.info(
        "Orchestrator started",
        extra={"worker_base_url": settings.worker.base_url},
    )

    yield

    await get_service_cache().aclose()
    await get_async_engine().dispose()
    logger.info("Orchestrator stopped")


def create_app() -> FastAPI:
    """
    Build the orchestrator application.

    Returns:
        FastAPI: Application with routers and middleware registered
    """
    app = FastAPI(
        title="docman",
        description="Ingestion job orchestration over a remote ingestion worker",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    # Added last so it runs outermost; request log lines carry the id.
    app.add_middleware(CorrelationMiddleware)

    app.include_router(api_router, prefix=API_PREFIX)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("docman.api.main:app", host="0.0.0.0", port=8000)
