"""CRUD operations for the record store."""

from docman.boundary.db.CRUD.base_crud import BaseCRUD
from docman.boundary.db.CRUD.ingestion_job_crud import IngestionJobCRUD, ingestion_job_crud

__all__ = ["BaseCRUD", "IngestionJobCRUD", "ingestion_job_crud"]
