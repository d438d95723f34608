"""
Technical Indicator Calculations

Pure NumPy implementations. No I/O, deterministic.
"""

from typing import Sequence

import numpy as np

RSI_MIN_OBSERVATIONS = 14
RSI_NEUTRAL = 50.0


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: Sequence[float]) -> float:
    """
    Relative Strength Index over a flat window.

    Gains and losses are averaged over every successive difference in
    ``closes`` (no Wilder smoothing). Fewer than 14 observations give the
    neutral value 50; no losses at all gives 100.
    """
    if len(closes) < RSI_MIN_OBSERVATIONS:
        return RSI_NEUTRAL

    prices = np.asarray(closes, dtype=float)
    deltas = np.diff(prices)

    gains = deltas[deltas > 0].sum()
    losses = -deltas[deltas < 0].sum()

    periods = len(prices) - 1
    avg_gain = gains / periods
    avg_loss = losses / periods

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return float(100 - (100 / (1 + rs)))
