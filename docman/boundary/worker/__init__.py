"""Ingestion worker RPC boundary."""

from docman.boundary.worker.client import IngestionWorkerClient

__all__ = ["IngestionWorkerClient"]
