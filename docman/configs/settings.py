"""
Aggregate settings for both processes.

The API reads database and worker; the reference worker reads simulation.
Each group keeps its own env prefix; log_level is unprefixed (LOG_LEVEL)
and lives only here.

Dependencies: pydantic_settings, docman.configs
System role: Central configuration aggregator
"""

from functools import lru_cache

from pydantic import Field, field_validator

from docman.configs.base import BaseSettings
from docman.configs.database import DatabaseSettings
from docman.configs.worker import WorkerClientSettings, WorkerSimulationSettings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Settings groups for the record store, the worker client and the simulation."""

    log_level: str = Field(
        default="INFO",
        description="Root log level for the API and the worker (DEBUG, INFO, WARNING, ERROR)",
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    worker: WorkerClientSettings = Field(default_factory=WorkerClientSettings)
    simulation: WorkerSimulationSettings = Field(default_factory=WorkerSimulationSettings)

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    """
    Return the process-wide settings, read from the environment on first call.

    Call get_settings.cache_clear() after changing the environment.
    """
    return Settings()
