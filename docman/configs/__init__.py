"""
Environment-driven configuration.

POSTGRES_* configures the record store, INGESTION_WORKER_* the client the
orchestrator uses, and INGESTION_SIM_* the reference worker.
"""

from docman.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
