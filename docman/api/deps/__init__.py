"""API-specific dependencies."""

from .dependencies import get_ingestion_orchestrator, get_service_cache

__all__ = ["get_ingestion_orchestrator", "get_service_cache"]
