"""
Yahoo Finance Chart Normalizer

Uses the public v8 chart endpoint for both quotes and intraday bars, so no
API key is needed. The quote request pulls a month of daily bars: the meta
block gives the live price and the closes feed a locally computed RSI.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from nseticker.schemas.market import ChartPoint, DataSource, Granularity, Quote
from nseticker.services.base import SchemaError
from nseticker.services.indicators import rsi
from nseticker.services.market_data.providers.base import (
    QuoteProvider,
    Request,
    build_point,
    to_float,
)
from nseticker.services.market_data.symbols import SymbolInfo

logger = logging.getLogger(__name__)

QUOTE_RANGE = "1mo"

# Yahoo caps how far back each intraday bar size goes
SERIES_RANGE = {
    Granularity.M1: "1d",
    Granularity.M5: "5d",
    Granularity.M15: "5d",
    Granularity.M30: "1mo",
    Granularity.M60: "1mo",
}


class YahooChartProvider(QuoteProvider):
    source = DataSource.YAHOO
    requires_credential = False

    def _url(self, info: SymbolInfo) -> str:
        return f"{self.base_url.rstrip('/')}/{info.yahoo_symbol}"

    def quote_request(self, info: SymbolInfo, credential: Optional[str]) -> Request:
        return self._url(info), {"range": QUOTE_RANGE, "interval": "1d"}

    def series_request(
        self, info: SymbolInfo, granularity: Granularity, credential: Optional[str]
    ) -> Request:
        return self._url(info), {
            "range": SERIES_RANGE[granularity],
            "interval": granularity.yahoo_interval,
        }

    def _result(self, raw: Any) -> dict:
        """Unwrap chart.result[0], surfacing chart.error as SchemaError."""
        if not isinstance(raw, dict) or "chart" not in raw:
            raise SchemaError(self.name, "Missing 'chart' envelope")
        chart = raw["chart"] or {}
        error = chart.get("error")
        if error:
            raise SchemaError(self.name, error.get("description") or str(error))
        results = chart.get("result") or []
        if not results:
            raise SchemaError(self.name, "Empty chart result")
        return results[0]

    def _closes(self, result: dict) -> list[float]:
        quotes = (result.get("indicators") or {}).get("quote") or [{}]
        return [c for c in (quotes[0].get("close") or []) if c is not None and c > 0]

    def parse_quote(self, raw: Any, info: SymbolInfo) -> Quote:
        result = self._result(raw)
        meta = result.get("meta") or {}

        price = to_float(meta.get("regularMarketPrice"), "regularMarketPrice", self.name)

        closes = self._closes(result)
        if meta.get("previousClose") is not None:
            previous_close = to_float(meta["previousClose"], "previousClose", self.name)
        elif len(closes) > 1:
            previous_close = closes[-2]
        else:
            previous_close = to_float(meta.get("chartPreviousClose"), "chartPreviousClose", self.name)

        market_time = meta.get("regularMarketTime")
        if market_time:
            as_of = datetime.fromtimestamp(market_time, tz=timezone.utc).isoformat()
        else:
            as_of = datetime.now(timezone.utc).isoformat(timespec="seconds")

        return Quote.from_prices(
            symbol=info.symbol,
            display_name=info.display_name,
            price=price,
            previous_close=previous_close,
            as_of=as_of,
            source=self.source,
        )

    def parse_series(self, raw: Any, granularity: Granularity) -> list[ChartPoint]:
        result = self._result(raw)
        timestamps = result.get("timestamp")
        quotes = (result.get("indicators") or {}).get("quote")
        if not timestamps or not quotes:
            raise SchemaError(self.name, "No time series data available")

        bars = quotes[0]
        columns = {}
        for field in ("open", "high", "low", "close", "volume"):
            values = bars.get(field)
            if values is None or len(values) != len(timestamps):
                raise SchemaError(self.name, f"Column {field!r} missing or misaligned")
            columns[field] = values

        points = []
        for i, stamp in enumerate(timestamps):
            # Yahoo pads gaps in trading with nulls
            if any(columns[field][i] is None for field in columns):
                continue
            point = build_point(
                datetime.fromtimestamp(stamp, tz=timezone.utc),
                to_float(columns["open"][i], "open", self.name),
                to_float(columns["high"][i], "high", self.name),
                to_float(columns["low"][i], "low", self.name),
                to_float(columns["close"][i], "close", self.name),
                to_float(columns["volume"][i], "volume", self.name),
            )
            if point is not None:
                points.append(point)
        return points

    async def quote_rsi(self, raw: Any, info: SymbolInfo, credential: Optional[str]) -> Optional[float]:
        """RSI from the daily closes already in the quote response."""
        return rsi(self._closes(self._result(raw)))
