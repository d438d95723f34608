"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from typing import Literal, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "NSE Ticker Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (Frontend URL)
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Market data provider
    market_data_provider: Literal["alpha_vantage", "yahoo"] = "alpha_vantage"

    # Alpha Vantage (key may also be set at runtime through the API)
    alpha_vantage_api_key: Optional[str] = None
    alpha_vantage_base_url: str = "https://www.alphavantage.co/query"

    # Yahoo Finance public chart endpoint (no key)
    yahoo_chart_base_url: str = "https://query1.finance.yahoo.com/v8/finance/chart"

    # Upstream requests use the aiohttp default timeout when unset
    request_timeout_seconds: Optional[float] = None

    # Quote cache / chart
    quote_cache_ttl_seconds: float = 30.0
    chart_max_points: int = 50

    # Background refresh of the whole symbol universe
    enable_background_refresh: bool = False
    refresh_interval_seconds: float = 30.0

    # Reject symbols outside the configured universe at the API edge
    allow_unknown_symbols: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
