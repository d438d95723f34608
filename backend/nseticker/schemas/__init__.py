"""
NSE Ticker Schema Contracts

Records exchanged between the data-acquisition layer and its callers.
"""

from nseticker.schemas.market import (
    DataSource,
    Granularity,
    Quote,
    ChartPoint,
    ChartSeriesResponse,
    BatchQuoteRequest,
    CredentialUpdate,
    CredentialStatus,
    SymbolListing,
)

__all__ = [
    "DataSource",
    "Granularity",
    "Quote",
    "ChartPoint",
    "ChartSeriesResponse",
    "BatchQuoteRequest",
    "CredentialUpdate",
    "CredentialStatus",
    "SymbolListing",
]
