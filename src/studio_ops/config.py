"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Back-office settings: Supabase access, admin auth and dashboard tuning."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    # Candidate codes tried before giving up on generation.
    identifier_max_attempts: int = Field(default=10, ge=1)
    growth_month_window: int = Field(default=6, ge=1)
    growth_category_limit: int = Field(default=6, ge=1)
    dashboard_list_limit: int = Field(default=10, ge=1)
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
