"""Typed settings configuration - single source of truth."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.portal.models.common import Role


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Storage
    storage_backend: Literal["memory", "sql", "redis"] = "memory"
    database_url: str = "sqlite:///./case_portal.db"
    redis_url: str | None = None
    redis_namespace: str = "case_portal"

    # Chunking
    chunk_max_chars: int = 500

    # Assistant
    assistant_candidate_limit: int = 3
    assistant_quote_chars: int = 300

    # Log retention (entries)
    query_log_capacity: int = 50
    audit_log_capacity: int = 1000

    # Audit origin used when the caller supplies none
    default_origin: str = "127.0.0.1"

    # Minimum roles per operation
    upload_min_role: Role = Role.officer
    edit_min_role: Role = Role.officer
    search_min_role: Role = Role.staff
    audit_min_role: Role = Role.admin


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
