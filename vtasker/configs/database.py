"""
Database settings.

PostgreSQL through asyncpg in deployments; POSTGRES_URL can point the
engine at any async SQLAlchemy URL instead, such as sqlite+aiosqlite for
local runs and tests.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from vtasker.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Connection target and pool sizing for the task database."""

    model_config = SettingsConfigDict(env_prefix="POSTGRES_")

    host: str = Field(default="localhost")
    port: int = Field(default=5432)
    user: str = Field(default="postgres")
    password: str = Field(default="postgres")
    db: str = Field(default="vtasker")
    url: str | None = Field(default=None, description="Full async URL; wins over the discrete fields")
    sslmode: str = Field(default="disable", description="'require' for managed PostgreSQL")

    pool_size: int = Field(default=10)
    max_overflow: int = Field(default=20)
    pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    echo_sql: bool = Field(default=False)

    @property
    def async_database_url(self) -> str:
        if self.url:
            return self.url
        # asyncpg takes ssl=require rather than sslmode
        query = "?ssl=require" if self.sslmode == "require" else ""
        return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.db}{query}"

    @property
    def is_sqlite(self) -> bool:
        return self.async_database_url.startswith("sqlite")

    def engine_options(self) -> dict:
        """Keyword arguments for create_async_engine; SQLite gets no pool sizing."""
        options: dict = {"echo": self.echo_sql}
        if not self.is_sqlite:
            options.update(
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
                pool_timeout=self.pool_timeout,
                pool_pre_ping=True,
            )
        return options
