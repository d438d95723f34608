"""
Upstream provider normalizers.

A closed set of provider families behind one interface; ``create_provider``
picks the active one from configuration.
"""

from typing import Any

from nseticker.core.config import Settings
from nseticker.services.market_data.providers.base import QuoteProvider
from nseticker.services.market_data.providers.alpha_vantage import AlphaVantageProvider
from nseticker.services.market_data.providers.yahoo import YahooChartProvider


def create_provider(settings: Settings, transport: Any) -> QuoteProvider:
    """Build the provider named by ``settings.market_data_provider``."""
    if settings.market_data_provider == "yahoo":
        return YahooChartProvider(transport, settings.yahoo_chart_base_url)
    return AlphaVantageProvider(transport, settings.alpha_vantage_base_url)


__all__ = [
    "QuoteProvider",
    "AlphaVantageProvider",
    "YahooChartProvider",
    "create_provider",
]
