"""
ReelChat — Application Settings

Design patterns:
  - Singleton: single Settings instance shared everywhere
  - Configuration Object: centralizes all env-based config
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration sourced from environment / .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Recommendation webhook ────────────────────────────
    webhook_url: str = "http://localhost:5678/webhook/movie-recommendations"
    webhook_timeout: Optional[float] = None  # None = wait as long as it takes

    # ── Payload scan limits ───────────────────────────────
    scan_max_depth: int = 256
    scan_max_nodes: int = 100_000

    # ── Sessions ──────────────────────────────────────────
    session_ttl_hours: float = 2.0

    # ── App ───────────────────────────────────────────────
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "info"

    # ── Derived helpers ───────────────────────────────────
    @property
    def webhook_host(self) -> str:
        return urlsplit(self.webhook_url).netloc


# Singleton – import this everywhere
settings = Settings()
