"""Application settings — loaded from environment variables / ``.env``.

Every variable carries the ``NPV_`` prefix, e.g. ``NPV_LOG_LEVEL=DEBUG``.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the NPV calculator API."""

    # ======================
    # Application
    # ======================
    APP_NAME: str = "NPV Calculator API"
    APP_VERSION: str = "1.0"
    LOG_LEVEL: str = "INFO"
    ACCESS_LOG_LEVEL: str = "WARNING"

    # ======================
    # Server
    # ======================
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_RELOAD: bool = False

    # ======================
    # CORS (browser UI origin)
    # ======================
    CORS_ALLOW_ORIGINS: list[str] = ["http://localhost:4200"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="NPV_",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
