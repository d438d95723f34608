from datetime import datetime, timedelta

import pytest

from nseticker.services.base import TransportError
from nseticker.services.cache import QuoteCache
from nseticker.services.market_data import MarketDataService
from nseticker.services.market_data.providers import AlphaVantageProvider, YahooChartProvider


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def global_quote(price="120.00", previous_close="118.00", change_percent="9.9999%"):
    return {
        "Global Quote": {
            "01. symbol": "TATASTEEL.BSE",
            "02. open": "118.50",
            "03. high": "121.00",
            "04. low": "117.90",
            "05. price": price,
            "06. volume": "1234567",
            "07. latest trading day": "2024-06-14",
            "08. previous close": previous_close,
            "09. change": "2.0000",
            "10. change percent": change_percent,
        }
    }


def rsi_payload(value="61.25"):
    return {
        "Meta Data": {"1: Symbol": "TATASTEEL.BSE", "2: Indicator": "Relative Strength Index (RSI)"},
        "Technical Analysis: RSI": {
            "2024-06-14": {"RSI": value},
            "2024-06-13": {"RSI": "40.00"},
        },
    }


def intraday_payload(count=60, interval="1min", start_close=100.0):
    start = datetime(2024, 6, 14, 9, 30)
    minutes = int(interval.replace("min", ""))
    series = {}
    for i in range(count):
        ts = start + timedelta(minutes=minutes * i)
        close = start_close + i * 0.1
        series[ts.strftime("%Y-%m-%d %H:%M:%S")] = {
            "1. open": f"{close - 0.05:.2f}",
            "2. high": f"{close + 0.20:.2f}",
            "3. low": f"{close - 0.20:.2f}",
            "4. close": f"{close:.2f}",
            "5. volume": "1500",
        }
    return {
        "Meta Data": {"4. Interval": interval, "6. Time Zone": "US/Eastern"},
        f"Time Series ({interval})": series,
    }


class StubTransport:
    """
    Answers Alpha Vantage style requests from canned payloads and counts
    calls per function. ``fail_symbols`` raise TransportError.
    """

    def __init__(self, fail_all=False, fail_symbols=()):
        self.fail_all = fail_all
        self.fail_symbols = set(fail_symbols)
        self.calls = []
        self.quote_payload = global_quote()
        self.rsi_payload = rsi_payload()
        self.series_payload = None

    def count(self, function):
        return sum(1 for _, params in self.calls if params.get("function") == function)

    async def get_json(self, url, params=None):
        params = params or {}
        self.calls.append((url, params))
        if self.fail_all or params.get("symbol") in self.fail_symbols:
            raise TransportError("StubTransport", "connection refused")

        function = params.get("function")
        if function == "GLOBAL_QUOTE":
            return self.quote_payload
        if function == "RSI":
            return self.rsi_payload
        if function == "TIME_SERIES_INTRADAY":
            if self.series_payload is not None:
                return self.series_payload
            return intraday_payload(interval=params["interval"])
        raise TransportError("StubTransport", f"unexpected request {params}")

    async def close(self):
        pass


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def transport():
    return StubTransport()


@pytest.fixture
def provider(transport):
    return AlphaVantageProvider(transport, "https://av.test/query")


@pytest.fixture
def yahoo_provider():
    return YahooChartProvider(StubTransport(), "https://yahoo.test/v8/finance/chart")


@pytest.fixture
def service(provider, clock):
    return MarketDataService(
        provider=provider,
        cache=QuoteCache(ttl=30, clock=clock),
        credential="demo-key",
    )
