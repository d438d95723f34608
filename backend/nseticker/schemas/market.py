"""
Market Data Schemas

Quote and chart records shared by every provider normalizer, the cache,
the synthetic generator and the API layer.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class DataSource(str, Enum):
    ALPHA_VANTAGE = "alpha_vantage"
    YAHOO = "yahoo"
    SYNTHETIC = "synthetic"


class Granularity(int, Enum):
    """Intraday bar sizes supported upstream, in minutes."""

    M1 = 1
    M5 = 5
    M15 = 15
    M30 = 30
    M60 = 60

    @property
    def alpha_vantage_interval(self) -> str:
        return f"{self.value}min"

    @property
    def yahoo_interval(self) -> str:
        return f"{self.value}m"

    @classmethod
    def for_minutes(cls, minutes: int) -> "Granularity":
        """
        Map a requested interval to the nearest supported bucket.

        Never finer than requested: 1 -> 1, <=5 -> 5, <=15 -> 15,
        <=30 -> 30, anything larger -> 60.
        """
        for bucket in cls:
            if minutes <= bucket.value:
                return bucket
        return cls.M60


# =============================================================================
# QUOTE
# =============================================================================


class Quote(BaseModel):
    """Point-in-time snapshot for one symbol. Never mutated after construction."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    display_name: str
    price: float = Field(..., ge=0)
    change: float
    change_percent: float
    rsi: Optional[float] = Field(default=None, ge=0, le=100)
    as_of: str = Field(..., description="Timestamp or provider label for when the quote was valid")
    source: DataSource
    is_synthetic: bool = False

    @classmethod
    def from_prices(
        cls,
        symbol: str,
        display_name: str,
        price: float,
        previous_close: float,
        as_of: str,
        source: DataSource,
        rsi: Optional[float] = None,
        is_synthetic: bool = False,
    ) -> "Quote":
        """Build a quote, deriving change and change percent from the previous close."""
        change = price - previous_close
        change_percent = change / previous_close * 100 if previous_close > 0 else 0.0
        return cls(
            symbol=symbol,
            display_name=display_name,
            price=price,
            change=change,
            change_percent=change_percent,
            rsi=rsi,
            as_of=as_of,
            source=source,
            is_synthetic=is_synthetic,
        )


# =============================================================================
# CHART
# =============================================================================


class ChartPoint(BaseModel):
    """Single OHLCV sample."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    open: float = Field(..., ge=0)
    high: float = Field(..., ge=0)
    low: float = Field(..., ge=0)
    close: float = Field(..., ge=0)
    volume: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_bounds(self) -> "ChartPoint":
        if not (self.low <= min(self.open, self.close) and max(self.open, self.close) <= self.high):
            raise ValueError(
                f"OHLC out of bounds: o={self.open} h={self.high} l={self.low} c={self.close}"
            )
        return self


class ChartSeriesResponse(BaseModel):
    symbol: str
    interval_minutes: int
    granularity: Granularity
    points: list[ChartPoint]


# =============================================================================
# API PAYLOADS
# =============================================================================


class BatchQuoteRequest(BaseModel):
    """Symbols to refresh in one batch. Empty means the whole universe."""

    symbols: list[str] = Field(default_factory=list, max_length=50)


class CredentialUpdate(BaseModel):
    api_key: str = Field(..., description="Upstream API key; blank clears it")


class CredentialStatus(BaseModel):
    configured: bool


class SymbolListing(BaseModel):
    symbol: str
    display_name: str
