"""
Ingestion worker configuration settings.

Client-side settings for reaching the remote worker, and simulation
settings for the reference worker's deferred completion.

Dependencies: pydantic, pydantic_settings
System role: Remote worker configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict

from docman.configs.base import BaseSettings


class WorkerClientSettings(BaseSettings):
    """Connection settings for the remote ingestion worker."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGESTION_WORKER_",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the ingestion worker RPC surface",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Total request timeout for every worker call",
    )
    connect_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Connection timeout for worker calls",
    )


class WorkerSimulationSettings(BaseSettings):
    """Reference worker simulation settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGESTION_SIM_",
        case_sensitive=False,
        extra="ignore",
    )

    min_delay_seconds: float = Field(
        default=120.0,
        ge=0,
        description="Lower bound of the deferred completion delay",
    )
    max_delay_seconds: float = Field(
        default=300.0,
        ge=0,
        description="Upper bound of the deferred completion delay",
    )
    strict_transitions: bool = Field(
        default=False,
        description="Reject control operations the state table does not allow",
    )
    embedding: list[float] = Field(
        default_factory=lambda: [0.1, 0.2, 0.3, 0.4, 0.5],
        description="Placeholder embedding returned for every id",
    )

    @model_validator(mode="after")
    def check_delay_range(self) -> "WorkerSimulationSettings":
        if self.max_delay_seconds < self.min_delay_seconds:
            raise ValueError("max_delay_seconds must be >= min_delay_seconds")
        return self
