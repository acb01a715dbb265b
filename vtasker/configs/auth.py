"""
Authentication configuration settings.

JWT signing, token lifetimes, password policy and account lockout.

Dependencies: pydantic, pydantic_settings
System role: Auth policy configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from vtasker.configs.base import BaseSettings


DEFAULT_JWT_SECRET = "your-256-bit-secret"


class AuthSettings(BaseSettings):
    """Authentication and session configuration."""

    model_config = SettingsConfigDict(env_prefix="AUTH_")

    jwt_secret: str = Field(default=DEFAULT_JWT_SECRET, description="HMAC secret for JWT signing")
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    token_ttl_hours: int = Field(default=24, description="Default token lifetime in hours")
    remember_me_ttl_days: int = Field(default=30, description="Token lifetime when rememberMe is set")

    bcrypt_rounds: int = Field(default=12, description="bcrypt cost factor")
    min_password_length: int = Field(default=8, description="Minimum password length")
    max_password_length: int = Field(default=72, description="Maximum password length (bcrypt limit)")

    max_failed_logins: int = Field(default=5, description="Failed sign-ins before the account locks")
    lockout_minutes: int = Field(default=15, description="Lock duration after too many failures")
