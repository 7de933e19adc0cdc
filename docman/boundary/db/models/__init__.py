"""ORM models."""

from docman.boundary.db.models.ingestion_job_model import IngestionJobModel

__all__ = ["IngestionJobModel"]
