"""
Aggregated vTasker settings.

Each section reads its own env prefix: POSTGRES_, AUTH_, GATEWAY_ and
VTASKER_ for the client. get_settings() is cached, so the environment is
read once per process.

Dependencies: pydantic, vtasker.configs
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from vtasker.configs.auth import AuthSettings
from vtasker.configs.base import BaseSettings
from vtasker.configs.database import DatabaseSettings
from vtasker.configs.gateway import ClientSettings, GatewaySettings


class Settings(BaseSettings):
    """Runtime fields plus one nested section per component."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    gateway: GatewaySettings = Field(default_factory=GatewaySettings)
    client: ClientSettings = Field(default_factory=ClientSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Process-wide Settings.

    Usage:
        from vtasker.configs import get_settings
        ttl = get_settings().auth.token_ttl_hours
    """
    return Settings()
