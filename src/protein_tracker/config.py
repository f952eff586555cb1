"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    openai_api_key: str
    openai_model: str = "gpt-4.1-mini"
    off_base_url: str = "https://world.openfoodfacts.org"
    off_user_agent: str = "ProteinTracker/1.0"
    off_page_size: int = Field(default=20, gt=0)
    remote_timeout_seconds: float = Field(default=15.0, gt=0)
    recognition_min_confidence: float = Field(default=0.3, ge=0.0, le=1.0)
    recognition_max_results: int = Field(default=3, gt=0)
    classifier_load_timeout_seconds: float = Field(default=10.0, gt=0)
    default_protein_goal_g: float = Field(default=150.0, gt=0)
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
