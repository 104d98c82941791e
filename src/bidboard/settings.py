"""
bidboard.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (JWT secret, remote service key).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BIDBOARD_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables and dev tokens.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "bidboard"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "bidboard"
    jwt_audience: str = "bidboard-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    session_ttl_minutes: int = 60
    admin_role: str = "admin"

    # Remote store: "sql" talks to the database directly, "http" to a PostgREST/GoTrue backend.
    store_backend: Literal["sql", "http"] = "sql"
    database_url: str = "sqlite+aiosqlite:///./bidboard.db"

    remote_url: str = "http://localhost:54321"
    remote_api_key: str = Field(default="", repr=False)
    remote_service_key: str = Field(default="", repr=False)
    remote_timeout_seconds: float = 10.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The remote service key is only needed for identity deletion (compensation);
# keep it out of logs and reprs.
