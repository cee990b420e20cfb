"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = None
    openai_store: bool = False
    foodsafety_api_key: str = "sample"
    foodsafety_base_url: str = "https://openapi.foodsafetykorea.go.kr/api"
    openfoodfacts_base_url: str = "https://world.openfoodfacts.org/api/v2"
    recipe_corpus_size: int = 1000
    recipe_corpus_ttl_seconds: int = 86400
    ai_timeout_seconds: float = 45.0
    ai_retry_attempts: int = 3
    ai_retry_backoff_seconds: float = 5.0
    malformed_output_retries: int = 1
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
