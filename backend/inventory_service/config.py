"""
Inventory Service — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads environment variables (or a .env file) and
       validates types/ranges. The CLI builds a Settings instance explicitly
       from its arguments, so command-line options always win.
Who:   Passed to create_app(); read by the lifespan, middleware, and routes.
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults are meant for local development. The CLI requires host, port and
    cache explicitly.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=3000, ge=1, le=65535, description="Bind port")

    # ── Photo Storage ─────────────────────────────────────────────────────
    # Directory holding uploaded photos under server-generated names.
    # Created recursively at startup if absent.
    cache_dir: str = Field(default="./cache", description="Directory for uploaded photo files")

    # Deleting an item leaves its photo file on disk unless this is enabled.
    purge_photos_on_delete: bool = Field(default=False)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated list of allowed origins ("*" allows any origin)
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Logging ───────────────────────────────────────────────────────────
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("cache_dir")
    @classmethod
    def validate_cache_dir(cls, v: str) -> str:
        """Rejects an empty cache directory path."""
        if not v or not v.strip():
            raise ValueError("cache_dir must not be empty")
        return v

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # CACHE_DIR and cache_dir both work
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Environment-derived settings, built once per process."""
    return Settings()
