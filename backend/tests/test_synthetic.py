import random
from datetime import datetime, timedelta, timezone

import pytest

from nseticker.schemas.market import DataSource
from nseticker.services.market_data.symbols import SYMBOL_UNIVERSE, DEFAULT_SYMBOL
from nseticker.services.market_data.synthetic import synthetic_quote, synthetic_series


NOW = datetime(2024, 6, 14, 10, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("symbol", list(SYMBOL_UNIVERSE))
def test_synthetic_quote_stays_near_baseline(symbol):
    info = SYMBOL_UNIVERSE[symbol]
    rng = random.Random(7)

    for _ in range(50):
        quote = synthetic_quote(symbol, now=NOW, rng=rng)
        assert quote.symbol == symbol
        assert quote.display_name == info.display_name
        assert quote.is_synthetic
        assert quote.source == DataSource.SYNTHETIC
        assert quote.price >= 0
        assert abs(quote.price - info.baseline_price) <= info.baseline_price * 0.005 + 0.01
        assert 0 <= quote.rsi <= 100
        assert abs(quote.rsi - info.baseline_rsi) <= 2.05
        assert quote.as_of == NOW.isoformat(timespec="seconds")


def test_synthetic_quote_change_percent_consistent():
    quote = synthetic_quote("TATAMOTORS", rng=random.Random(1))
    previous_close = quote.price - quote.change
    assert quote.change_percent == pytest.approx(quote.change / previous_close * 100)
    assert (quote.change < 0) == (quote.change_percent < 0)


def test_synthetic_quote_unknown_symbol_uses_default_baseline():
    quote = synthetic_quote("reliance", rng=random.Random(3))
    default = SYMBOL_UNIVERSE[DEFAULT_SYMBOL]

    assert quote.symbol == "RELIANCE"
    assert abs(quote.price - default.baseline_price) <= default.baseline_price * 0.005 + 0.01


def test_synthetic_series_shape():
    points = synthetic_series("HDFCBANK", now=NOW, rng=random.Random(11))

    assert len(points) == 50
    assert points[-1].timestamp == NOW
    assert points[0].timestamp == NOW - timedelta(minutes=49)
    for prev, cur in zip(points, points[1:]):
        assert cur.timestamp - prev.timestamp == timedelta(minutes=1)


@pytest.mark.parametrize("seed", range(5))
def test_synthetic_series_respects_ohlc_bounds(seed):
    for point in synthetic_series("INDIAVIX", rng=random.Random(seed)):
        assert point.low <= point.open <= point.high
        assert point.low <= point.close <= point.high
        assert point.close > 0
        assert 0 <= point.volume < 100_000
