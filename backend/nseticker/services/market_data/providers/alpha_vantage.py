"""
Alpha Vantage Normalizer

Endpoints:
  * GLOBAL_QUOTE for the latest quote snapshot
  * TIME_SERIES_INTRADAY for chart bars
  * RSI (daily, 14 periods) for the quote's indicator

All three require an API key. Numbers arrive as strings.
"""

import logging
from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

from nseticker.schemas.market import ChartPoint, DataSource, Granularity, Quote
from nseticker.services.base import MarketDataError, SchemaError
from nseticker.services.indicators import RSI_NEUTRAL
from nseticker.services.market_data.providers.base import (
    QuoteProvider,
    Request,
    build_point,
    to_float,
)
from nseticker.services.market_data.symbols import SymbolInfo

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "US/Eastern"
RSI_TIME_PERIOD = 14


class AlphaVantageProvider(QuoteProvider):
    source = DataSource.ALPHA_VANTAGE
    requires_credential = True

    def quote_request(self, info: SymbolInfo, credential: Optional[str]) -> Request:
        return self.base_url, {
            "function": "GLOBAL_QUOTE",
            "symbol": info.alpha_vantage_symbol,
            "apikey": credential,
        }

    def series_request(
        self, info: SymbolInfo, granularity: Granularity, credential: Optional[str]
    ) -> Request:
        return self.base_url, {
            "function": "TIME_SERIES_INTRADAY",
            "symbol": info.alpha_vantage_symbol,
            "interval": granularity.alpha_vantage_interval,
            "apikey": credential,
        }

    def rsi_request(self, info: SymbolInfo, credential: Optional[str]) -> Request:
        return self.base_url, {
            "function": "RSI",
            "symbol": info.alpha_vantage_symbol,
            "interval": "daily",
            "time_period": RSI_TIME_PERIOD,
            "series_type": "close",
            "apikey": credential,
        }

    def _check_payload(self, raw: Any) -> dict:
        """Reject error, throttling and non-object payloads."""
        if not isinstance(raw, dict):
            raise SchemaError(self.name, f"Expected JSON object, got {type(raw).__name__}")
        if "Error Message" in raw:
            raise SchemaError(self.name, raw["Error Message"])
        # "Note" / "Information" carry rate limit and premium-endpoint notices
        for key in ("Note", "Information"):
            if key in raw and len(raw) == 1:
                raise SchemaError(self.name, raw[key])
        return raw

    def parse_quote(self, raw: Any, info: SymbolInfo) -> Quote:
        payload = self._check_payload(raw)
        quote = payload.get("Global Quote")
        if not quote:
            raise SchemaError(self.name, "No data received from API")

        price = to_float(quote.get("05. price"), "05. price", self.name)
        previous_close = to_float(quote.get("08. previous close"), "08. previous close", self.name)
        as_of = quote.get("07. latest trading day") or datetime.now().isoformat(timespec="seconds")

        return Quote.from_prices(
            symbol=info.symbol,
            display_name=info.display_name,
            price=price,
            previous_close=previous_close,
            as_of=as_of,
            source=self.source,
        )

    def parse_series(self, raw: Any, granularity: Granularity) -> list[ChartPoint]:
        payload = self._check_payload(raw)
        key = f"Time Series ({granularity.alpha_vantage_interval})"
        series = payload.get(key)
        if not series:
            raise SchemaError(self.name, "No time series data available")

        meta = payload.get("Meta Data", {})
        tz = ZoneInfo(meta.get("6. Time Zone", DEFAULT_TIMEZONE))

        points = []
        for stamp in sorted(series):
            bar = series[stamp]
            try:
                ts = datetime.strptime(stamp, "%Y-%m-%d %H:%M:%S").replace(tzinfo=tz)
            except ValueError:
                raise SchemaError(self.name, f"Bad timestamp {stamp!r}")
            point = build_point(
                ts,
                to_float(bar.get("1. open"), "1. open", self.name),
                to_float(bar.get("2. high"), "2. high", self.name),
                to_float(bar.get("3. low"), "3. low", self.name),
                to_float(bar.get("4. close"), "4. close", self.name),
                to_float(bar.get("5. volume"), "5. volume", self.name),
            )
            if point is not None:
                points.append(point)
        return points

    def parse_rsi(self, raw: Any) -> float:
        payload = self._check_payload(raw)
        analysis = payload.get("Technical Analysis: RSI")
        if not analysis:
            raise SchemaError(self.name, "No RSI data available")

        latest = max(analysis)
        value = to_float(analysis[latest].get("RSI"), "RSI", self.name)
        if not 0 <= value <= 100:
            raise SchemaError(self.name, f"RSI out of range: {value}")
        return value

    async def quote_rsi(self, raw: Any, info: SymbolInfo, credential: Optional[str]) -> Optional[float]:
        """Upstream RSI; the quote is still good if this call fails."""
        url, params = self.rsi_request(info, credential)
        try:
            return self.parse_rsi(await self.transport.get_json(url, params))
        except MarketDataError as e:
            logger.warning(f"RSI unavailable for {info.symbol}, using neutral: {e}")
            return RSI_NEUTRAL
