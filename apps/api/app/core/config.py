"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    auth_provider: Literal["mock", "firebase"] = "firebase"
    firebase_project_id: str | None = None
    firebase_audience: str | None = None
    slug_scope: Literal["global", "tenant"] = "global"
    slug_max_attempts: int = Field(default=10_000, ge=1)
    slug_conflict_retries: int = Field(default=3, ge=0)
    blog_page_size: int = Field(default=10, ge=1, le=100)

    model_config = SettingsConfigDict(env_prefix="HOTELBLOG_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
