"""Service orchestrators."""

from .ingestion_orchestrator import IngestionOrchestrator

__all__ = ["IngestionOrchestrator"]
