"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from session_desk.configs.api import ApiSettings
from session_desk.configs.base import BaseSettings
from session_desk.configs.portal import PortalSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    portal: PortalSettings = PortalSettings()
    api: ApiSettings = ApiSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from session_desk.configs import get_settings
        settings = get_settings()
    """
    return Settings()
