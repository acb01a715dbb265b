"""
Gateway and client configuration settings.

Upstream location for the proxy routes and defaults for the client SDK.

Dependencies: pydantic, pydantic_settings
System role: Upstream HTTP configuration
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from vtasker.configs.base import BaseSettings


class GatewaySettings(BaseSettings):
    """Proxy route configuration."""

    model_config = SettingsConfigDict(env_prefix="GATEWAY_")

    upstream_url: str = Field(default="http://localhost:8080", description="Backend base URL")
    api_base_path: str = Field(default="/api/v1", description="Backend API prefix")
    timeout_seconds: float = Field(default=10.0, description="Upstream request timeout")

    @property
    def upstream_base(self) -> str:
        """Backend URL joined with the API prefix."""
        return f"{self.upstream_url.rstrip('/')}/{self.api_base_path.strip('/')}"


class ClientSettings(BaseSettings):
    """Client SDK configuration."""

    model_config = SettingsConfigDict(env_prefix="VTASKER_")

    api_url: str = Field(default="http://localhost:8080", description="Backend base URL")
    api_base_path: str = Field(default="/api/v1", description="Backend API prefix")
    token_dir: Path = Field(
        default=Path.home() / ".vtasker",
        description="Directory for the persistent (remember me) token",
    )
    retry_count: int = Field(default=2, description="Retries for transient failures")
    retry_delay_seconds: float = Field(default=1.0, description="Delay between retries")
    timeout_seconds: float = Field(default=10.0, description="Request timeout")
