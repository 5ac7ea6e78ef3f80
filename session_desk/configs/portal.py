"""
Live-courses backend connection settings.

Dependencies: pydantic_settings
System role: Configuration for the backend REST client
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PortalSettings(BaseSettings):
    """Connection settings for the live-courses REST backend."""

    model_config = SettingsConfigDict(
        env_prefix="PORTAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:5007/api/livecourses",
        description="Base URL of the live-courses API",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout for backend calls",
    )
    upload_timeout_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Per-request timeout for material uploads",
    )
    token: str | None = Field(
        default=None,
        description="Fallback bearer token when the caller supplies none",
    )
