"""
Reference ingestion worker.

Simulates the remote service that performs ingestion and owns the
authoritative job status while a job is in flight.
"""

from docman.ingestion_worker.engine import IngestionWorkerEngine, WorkerJobState

__all__ = ["IngestionWorkerEngine", "WorkerJobState"]
