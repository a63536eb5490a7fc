"""Application configuration."""

import os

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Missing Supabase credentials degrade to empty strings; the store client
    is left to fail on its own.
    """

    supabase_url: str = Field(
        default="",
        validation_alias=AliasChoices("supabase_url", "next_public_supabase_url"),
    )
    supabase_service_key: str = Field(
        default="",
        validation_alias=AliasChoices(
            "supabase_service_key", "next_public_supabase_service_role_key"
        ),
    )
    images_table: str = "images"
    session_ttl_seconds: int = 3600
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
