"""
Symbol Universe

The fixed list of NSE symbols served by the dashboard, with provider
identifiers and the baseline values used for synthetic quotes.
"""

from dataclasses import dataclass
from typing import Optional

from nseticker.services.base import UnknownSymbol


@dataclass(frozen=True)
class SymbolInfo:
    symbol: str
    display_name: str
    alpha_vantage_symbol: str
    yahoo_symbol: str
    baseline_price: float
    baseline_change: float
    baseline_change_percent: float
    baseline_rsi: float


SYMBOL_UNIVERSE: dict[str, SymbolInfo] = {
    info.symbol: info
    for info in [
        SymbolInfo("TATASTEEL", "Tata Steel Limited", "TATASTEEL.BSE", "TATASTEEL.NS",
                   118.45, 2.35, 2.02, 65.2),
        SymbolInfo("TATAMOTORS", "Tata Motors Limited", "TATAMOTORS.BSE", "TATAMOTORS.NS",
                   924.80, -15.60, -1.66, 42.8),
        SymbolInfo("NIFTY50", "Nifty 50 Index", "NIFTY50.BSE", "^NSEI",
                   24587.20, 145.30, 0.59, 58.4),
        SymbolInfo("INDIAVIX", "India VIX", "INDIAVIX.BSE", "^INDIAVIX",
                   13.45, -0.87, -6.08, 35.6),
        SymbolInfo("HDFCBANK", "HDFC Bank Limited", "HDFCBANK.BSE", "HDFCBANK.NS",
                   1687.90, 23.45, 1.41, 52.1),
    ]
}

# Baseline used for symbols outside the universe
DEFAULT_SYMBOL = "TATASTEEL"


def list_symbols() -> list[SymbolInfo]:
    """Symbols in display order."""
    return list(SYMBOL_UNIVERSE.values())


def get_symbol_info(symbol: str) -> Optional[SymbolInfo]:
    return SYMBOL_UNIVERSE.get(symbol.upper().strip())


def require_symbol(symbol: str) -> SymbolInfo:
    """Look up a symbol, raising UnknownSymbol if it is not served."""
    info = get_symbol_info(symbol)
    if info is None:
        raise UnknownSymbol(
            "SymbolUniverse",
            f"Unknown symbol {symbol!r}",
            {"symbol": symbol, "known": list(SYMBOL_UNIVERSE)},
        )
    return info


def resolve_symbol(symbol: str) -> SymbolInfo:
    """
    Look up a symbol, tolerating unknown ones.

    Unknown symbols keep their own name and are passed upstream verbatim,
    but borrow the default symbol's synthetic baseline.
    """
    info = get_symbol_info(symbol)
    if info is not None:
        return info

    symbol = symbol.upper().strip()
    default = SYMBOL_UNIVERSE[DEFAULT_SYMBOL]
    return SymbolInfo(
        symbol=symbol,
        display_name=symbol,
        alpha_vantage_symbol=symbol,
        yahoo_symbol=symbol,
        baseline_price=default.baseline_price,
        baseline_change=default.baseline_change,
        baseline_change_percent=default.baseline_change_percent,
        baseline_rsi=default.baseline_rsi,
    )
