"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    api_base_url: str
    request_timeout_seconds: float = 15.0
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    meal_plan_ttl_seconds: int = 86400
    default_quantity: float = 100.0
    default_country: str = "Vietnam"
    default_city: str = "Hanoi"
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="MEAL_COMPOSER_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def uses_supabase(self) -> bool:
        """Return True when both Supabase credentials are configured."""
        return bool(self.supabase_url and self.supabase_service_key)
