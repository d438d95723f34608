"""
Indicator Calculations

PURE PYTHON - No I/O.
Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from nseticker.services.indicators.calculations import rsi, RSI_NEUTRAL

__all__ = ["rsi", "RSI_NEUTRAL"]
