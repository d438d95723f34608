"""
Cache module for NSE Ticker.

Provides the in-memory TTL cache for quotes.
"""

from nseticker.services.cache.quote_cache import (
    CacheEntry,
    QuoteCache,
    DEFAULT_TTL_SECONDS,
)

__all__ = [
    "CacheEntry",
    "QuoteCache",
    "DEFAULT_TTL_SECONDS",
]
