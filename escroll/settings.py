"""Application settings loaded from environment variables and .env file."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import EMPTY_PAGE_THRESHOLD


class Settings(BaseSettings):
    """Settings for escroll. Every field can be set as ``ESCROLL_<NAME>``."""

    model_config = SettingsConfigDict(
        env_prefix="ESCROLL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = "localhost:9200"
    timeout: float = Field(default=30.0, gt=0)
    empty_threshold: int = Field(default=EMPTY_PAGE_THRESHOLD, ge=0)
    color: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
