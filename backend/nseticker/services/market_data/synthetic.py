"""
Synthetic Data Generator

Placeholder quotes and chart bars for when no real data is available.
Values are jittered around a static per-symbol baseline; they carry no
statistical fidelity and are always tagged ``is_synthetic``.
"""

import random
from datetime import datetime, timedelta, timezone
from typing import Optional

from nseticker.schemas.market import ChartPoint, DataSource, Quote
from nseticker.services.market_data.symbols import resolve_symbol

# Relative noise amplitudes
PRICE_JITTER = 0.005
BAR_NOISE = 0.01
RSI_JITTER = 2.0

SERIES_POINTS = 50
SERIES_SPACING = timedelta(minutes=1)
MAX_VOLUME = 100_000


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def synthetic_quote(
    symbol: str,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> Quote:
    """Jittered baseline quote. Unknown symbols use the default baseline."""
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    info = resolve_symbol(symbol)

    base = info.baseline_price
    previous_close = base - info.baseline_change
    price = max(0.0, base + (rng.random() - 0.5) * 2 * base * PRICE_JITTER)
    rsi_value = _clamp(info.baseline_rsi + (rng.random() - 0.5) * 2 * RSI_JITTER, 0.0, 100.0)

    return Quote.from_prices(
        symbol=info.symbol,
        display_name=info.display_name,
        price=round(price, 2),
        previous_close=previous_close,
        as_of=now.isoformat(timespec="seconds"),
        source=DataSource.SYNTHETIC,
        rsi=round(rsi_value, 1),
        is_synthetic=True,
    )


def synthetic_series(
    symbol: str,
    points: int = SERIES_POINTS,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> list[ChartPoint]:
    """
    ``points`` one-minute bars ending at ``now``.

    Each bar draws open and close independently around the baseline price,
    then widens high/low past them, so low <= open,close <= high holds.
    """
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    base = resolve_symbol(symbol).baseline_price
    amplitude = base * BAR_NOISE

    bars = []
    for i in range(points - 1, -1, -1):
        open_price = round(base + (rng.random() - 0.5) * 2 * amplitude, 2)
        close_price = round(base + (rng.random() - 0.5) * 2 * amplitude, 2)
        high_price = round(max(open_price, close_price) + rng.random() * amplitude * 0.5, 2)
        low_price = round(max(0.0, min(open_price, close_price) - rng.random() * amplitude * 0.5), 2)

        bars.append(
            ChartPoint(
                timestamp=now - SERIES_SPACING * i,
                open=open_price,
                high=high_price,
                low=low_price,
                close=close_price,
                volume=rng.randrange(MAX_VOLUME),
            )
        )

    return bars
