"""
MicroDash Configuration
=======================
All environment variables in one place. Pydantic Settings validates
types at startup so a bad threshold fails at boot, not mid-request.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Loaded from environment variables or a .env file."""

    # --- App settings ---
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    # --- Dashboard date range ---
    default_range_days: int = 30
    max_range_days: int = 366

    # --- Synthetic data source ---
    # Kill switch: with no real measurement feed wired in, the dashboard
    # endpoints serve generated data. Turn off to make them answer 503.
    enable_synthetic_source: bool = True
    # None = fresh entropy per request; set for reproducible demo data
    synthetic_seed: Optional[int] = None

    # --- Trend analysis ---
    # Leading/trailing window size (days) for change detection, clamped to n // 2
    change_window_days: int = 7
    # Minimum absolute shift in mean intensity (points on the 0-100 scale)
    change_threshold: float = 15.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
