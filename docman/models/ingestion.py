"""
Ingestion domain models and schemas.

Result shapes returned by the orchestrator and the wire schemas of the
ingestion worker RPC surface.

Dependencies: pydantic
System role: Ingestion job API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docman.core.job_states import IngestionStatus


class IngestionJob(BaseModel):
    """Persisted ingestion job record."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    status: IngestionStatus
    payload: dict = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime


class WorkerStatusResponse(BaseModel):
    """
    Worker answer to start, status and control calls.

    status is absent when the worker answered with an empty body; unknown
    fields are kept so the raw response survives the round-trip.
    """

    model_config = ConfigDict(extra="allow")

    status: str | None = None


class RemoteStartResult(WorkerStatusResponse):
    """Worker start response with the id assigned to the new job."""

    job_id: uuid.UUID


class RemoteStatusResult(BaseModel):
    """Worker status for a job, or the cached status when the worker could not be reached."""

    job_id: uuid.UUID
    status: str | None = None
    stale: bool = Field(default=False, description="True when status was not confirmed by the worker")
    remote_error: str | None = None


class ControlResult(BaseModel):
    """Outcome of cancel, pause, resume or retry."""

    job: IngestionJob
    remote_synced: bool = Field(description="False when the worker call did not complete")
    remote_status: str | None = Field(default=None, description="Status the worker reported, if any")


class WorkerStartRequest(BaseModel):
    """
    Start request body: the job id plus the caller's payload fields.

    Ids are opaque; numeric ids are accepted and keyed by their decimal
    string, so /status/7 finds a job started with {"id": 7}.
    """

    model_config = ConfigDict(extra="allow")

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def stringify_numeric_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value
