"""
Market Data Service Implementation

Serves quotes and intraday charts for the dashboard.
Primary: the configured upstream provider (Alpha Vantage or Yahoo)
Cache: in-memory, 30 second TTL per symbol
Fallback: synthetic data whenever the upstream path fails
"""

import asyncio
import logging
from typing import Optional

from pydantic import ValidationError

from nseticker.core.config import Settings, get_settings
from nseticker.schemas.market import (
    BatchQuoteRequest,
    ChartPoint,
    Granularity,
    Quote,
)
from nseticker.services.base import MarketDataError, SchemaError
from nseticker.services.cache import QuoteCache
from nseticker.services.market_data.interface import (
    BatchQuoteResult,
    FetchResult,
    MarketDataServiceInterface,
)
from nseticker.services.market_data.providers import QuoteProvider, create_provider
from nseticker.services.market_data.symbols import (
    DEFAULT_SYMBOL,
    list_symbols,
    resolve_symbol,
)
from nseticker.services.market_data.synthetic import synthetic_quote, synthetic_series
from nseticker.services.market_data.transport import HttpTransport

logger = logging.getLogger(__name__)

DEFAULT_CHART_POINTS = 50


class MarketDataService(MarketDataServiceInterface):
    """
    Market Data Service.

    Owns the quote cache and the in-memory API credential. One instance is
    built at application start and shared by everything that needs quotes.
    """

    def __init__(
        self,
        provider: QuoteProvider,
        cache: Optional[QuoteCache] = None,
        credential: Optional[str] = None,
        chart_max_points: int = DEFAULT_CHART_POINTS,
    ):
        self._provider = provider
        self._cache = cache if cache is not None else QuoteCache()
        self._credential: Optional[str] = None
        self._chart_max_points = chart_max_points
        self.set_credential(credential)

    @property
    def provider(self) -> QuoteProvider:
        return self._provider

    @property
    def cache(self) -> QuoteCache:
        return self._cache

    # ============ Credential ============

    def set_credential(self, key: Optional[str]) -> None:
        """Set the upstream API key for this process. Blank clears it."""
        key = (key or "").strip()
        self._credential = key or None
        if self._credential:
            logger.info(f"{self._provider.name} credential configured")

    def get_credential(self) -> Optional[str]:
        return self._credential

    # ============ Quotes ============

    async def fetch_quote(self, symbol: str) -> FetchResult:
        """One upstream quote fetch, bypassing the cache. Never raises MarketDataError."""
        info = resolve_symbol(symbol)
        try:
            quote = await self._provider.fetch_quote(info, self._credential)
            return FetchResult(symbol=info.symbol, quote=quote)
        except MarketDataError as e:
            return FetchResult(symbol=info.symbol, error=e)
        except ValidationError as e:
            error = SchemaError(
                self._provider.name,
                f"Quote failed validation: {e.errors()[0]['msg']}",
                {"errors": e.error_count()},
            )
            return FetchResult(symbol=info.symbol, error=error)

    async def get_quote(self, symbol: str) -> Quote:
        """Cached or freshly fetched quote; synthetic if the upstream path fails."""
        symbol = symbol.upper().strip()
        try:
            return await self._get_quote(symbol)
        except Exception as e:
            logger.exception(f"Unexpected error getting quote for {symbol}: {e}")
            quote = synthetic_quote(symbol)
            self._cache.put(symbol, quote)
            return quote

    async def _get_quote(self, symbol: str) -> Quote:
        cached = self._cache.fresh_quote(symbol)
        if cached is not None:
            return cached

        async with self._cache.lock(symbol):
            # Another task may have refreshed it while we waited
            cached = self._cache.fresh_quote(symbol)
            if cached is not None:
                return cached

            result = await self.fetch_quote(symbol)
            if result.ok:
                quote = result.quote
                logger.debug(f"Got {symbol} from {self._provider.name}: {quote.price:.2f}")
            else:
                logger.warning(f"Using synthetic quote for {symbol} ({result.reason})")
                quote = synthetic_quote(symbol)

            self._cache.put(symbol, quote)
            return quote

    async def get_quotes(self, symbols: Optional[list[str]] = None) -> list[Quote]:
        """
        Batch refresh. Fetches run concurrently and each symbol's failure
        stays contained to that symbol.
        """
        if not symbols:
            symbols = [info.symbol for info in list_symbols()]
        return list(await asyncio.gather(*(self.get_quote(s) for s in symbols)))

    async def execute(self, input_data: BatchQuoteRequest) -> BatchQuoteResult:
        quotes = await self.get_quotes(input_data.symbols)
        warnings = [
            f"Using synthetic data for {q.symbol}" for q in quotes if q.is_synthetic
        ]
        return BatchQuoteResult(quotes=quotes, warnings=warnings)

    # ============ Chart ============

    async def get_chart_series(self, symbol: str, interval_minutes: int) -> list[ChartPoint]:
        """Most recent chart points at the nearest supported granularity."""
        granularity = Granularity.for_minutes(interval_minutes)
        info = resolve_symbol(symbol)

        try:
            points = await self._provider.fetch_series(info, granularity, self._credential)
            series = self._trim_series(points)
            if not series:
                raise SchemaError(self._provider.name, "No plottable points in series")
            return series
        except MarketDataError as e:
            logger.warning(
                f"Using synthetic chart for {info.symbol} @ {granularity.value}m ({e.kind}: {e.message})"
            )
        except Exception as e:
            logger.exception(f"Unexpected error getting chart for {info.symbol}: {e}")

        return synthetic_series(info.symbol, self._chart_max_points)

    def _trim_series(self, points: list[ChartPoint]) -> list[ChartPoint]:
        """Ascending, unique timestamps, positive closes, most recent N only."""
        by_timestamp = {}
        for point in sorted(points, key=lambda p: p.timestamp):
            if point.close > 0:
                by_timestamp[point.timestamp] = point
        series = list(by_timestamp.values())
        return series[-self._chart_max_points:]

    # ============ Lifecycle ============

    async def health_check(self) -> bool:
        """Probe the upstream with the default symbol."""
        result = await self.fetch_quote(DEFAULT_SYMBOL)
        if not result.ok:
            logger.info(f"Health probe failed: {result.reason}")
        return result.ok

    async def close(self) -> None:
        await self._provider.close()


def create_market_data_service(settings: Optional[Settings] = None) -> MarketDataService:
    """Build the service and its collaborators from settings."""
    settings = settings or get_settings()
    transport = HttpTransport(timeout_seconds=settings.request_timeout_seconds)
    provider = create_provider(settings, transport)
    cache = QuoteCache(ttl=settings.quote_cache_ttl_seconds)

    logger.info(
        f"Market data provider: {provider.name} "
        f"(cache TTL {settings.quote_cache_ttl_seconds:.0f}s)"
    )
    return MarketDataService(
        provider=provider,
        cache=cache,
        credential=settings.alpha_vantage_api_key,
        chart_max_points=settings.chart_max_points,
    )
