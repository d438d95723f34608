"""
Market Data Service

CONTRACT:
    Input:  symbol / (symbol, interval minutes) / BatchQuoteRequest
    Output: Quote / list[ChartPoint] / BatchQuoteResult

RESPONSIBILITIES:
    - Fetch quotes and intraday bars from the configured provider
    - Normalize provider JSON to the internal schemas
    - Attach RSI (upstream or computed locally)
    - Cache quotes per symbol for 30 seconds
    - Fall back to synthetic data instead of raising
"""

from nseticker.services.market_data.interface import (
    MarketDataServiceInterface,
    FetchResult,
    BatchQuoteResult,
)
from nseticker.services.market_data.service import (
    MarketDataService,
    create_market_data_service,
)
from nseticker.services.market_data.refresher import QuoteRefresher

__all__ = [
    "MarketDataServiceInterface",
    "FetchResult",
    "BatchQuoteResult",
    "MarketDataService",
    "create_market_data_service",
    "QuoteRefresher",
]
