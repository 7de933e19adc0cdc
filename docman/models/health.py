"""Liveness probe schema shared by the API and the reference worker."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "healthy"
    message: str
