import numpy as np
import pytest

from nseticker.services.indicators import rsi


def test_rsi_empty_is_neutral():
    assert rsi([]) == 50


def test_rsi_below_lookback_is_neutral():
    assert rsi([100.0 + i for i in range(13)]) == 50


def test_rsi_all_gains_is_100():
    assert rsi([100.0 + i for i in range(15)]) == 100


def test_rsi_all_losses_is_0():
    assert rsi([100.0 - i for i in range(15)]) == 0


def test_rsi_flat_series_is_100():
    # No losses at all, so the zero-loss branch wins
    assert rsi([42.0] * 20) == 100


def test_rsi_mixed_series_matches_flat_average():
    closes = [44, 44.5, 43.5, 44, 44.5, 45, 45.5, 45, 45.5, 46, 46.5, 46, 46.5, 47]

    deltas = np.diff(closes)
    avg_gain = deltas[deltas > 0].sum() / (len(closes) - 1)
    avg_loss = -deltas[deltas < 0].sum() / (len(closes) - 1)
    expected = 100 - 100 / (1 + avg_gain / avg_loss)

    value = rsi(closes)
    assert 50 < value < 100
    assert value == pytest.approx(expected)
    # gains 5.0, losses 2.0 over 13 periods -> rs = 2.5
    assert value == pytest.approx(100 - 100 / 3.5)


def test_rsi_accepts_numpy_arrays():
    assert rsi(np.linspace(10, 20, 30)) == 100
