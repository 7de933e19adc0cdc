"""
Record store configuration.

POSTGRES_* fields assemble a PostgreSQL URL; POSTGRES_URL replaces them
entirely, which is how local runs point at SQLite.

Dependencies: pydantic, pydantic_settings, sqlalchemy
System role: Record store connection configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict
from sqlalchemy.engine import URL

from docman.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """PostgreSQL connection and pool settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides the individual fields when set",
    )

    host: str = Field(default="localhost")
    port: int = Field(default=5432)
    user: str = Field(default="postgres")
    password: str = Field(default="postgres")
    db: str = Field(default="docman", description="Database name")
    sslmode: str = Field(default="prefer", description="libpq sslmode; 'require' maps to asyncpg ssl=require")

    pool_size: int = Field(default=10, gt=0)
    max_overflow: int = Field(default=20, ge=0)
    pool_timeout: int = Field(default=30, gt=0, description="Seconds to wait for a pooled connection")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    def _postgres_url(self, drivername: str, query: dict[str, str]) -> str:
        return URL.create(
            drivername,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.db,
            query=query,
        ).render_as_string(hide_password=False)

    @property
    def database_url(self) -> str:
        """Synchronous URL, for tooling that cannot use asyncpg."""
        if self.url:
            return self.url
        return self._postgres_url("postgresql", {"sslmode": self.sslmode})

    @property
    def async_database_url(self) -> str:
        """URL used by the async engine."""
        if self.url:
            return self.url
        query = {"ssl": "require"} if self.sslmode == "require" else {}
        return self._postgres_url("postgresql+asyncpg", query)
