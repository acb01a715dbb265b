"""
Shared settings base.

Every vTasker settings class reads the process environment and an optional
.env file, ignores unknown keys, and carries the runtime fields common to
the API, the gateway and the client.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Common runtime settings; subclasses add an env_prefix."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="development, staging or production")
    debug: bool = Field(default=False, description="Verbose error output")
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API and the gateway",
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"
