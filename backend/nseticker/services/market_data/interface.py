"""
Market Data Service Interface

Defines the contract for the data-acquisition layer.
"""

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from nseticker.services.base import BaseService, MarketDataError
from nseticker.schemas.market import BatchQuoteRequest, ChartPoint, Quote


@dataclass
class FetchResult:
    """Outcome of one upstream quote fetch: a quote or the reason there is none."""

    symbol: str
    quote: Optional[Quote] = None
    error: Optional[MarketDataError] = None

    @property
    def ok(self) -> bool:
        return self.quote is not None

    @property
    def reason(self) -> Optional[str]:
        if self.error is None:
            return None
        return f"{self.error.kind}: {self.error.message}"


@dataclass
class BatchQuoteResult:
    """Quotes for a batch refresh plus any per-symbol warnings."""

    quotes: list[Quote]
    warnings: list[str] = field(default_factory=list)


class MarketDataServiceInterface(BaseService[BatchQuoteRequest, BatchQuoteResult]):
    """
    Market Data Service Contract.

    INPUT: BatchQuoteRequest
        - symbols: Symbols to refresh (empty = whole universe)

    OUTPUT: BatchQuoteResult
        - quotes: One Quote per requested symbol, in order
        - warnings: Symbols that fell back to synthetic data

    None of the public operations raise; failures resolve to synthetic data.
    """

    @property
    def name(self) -> str:
        return "MarketDataService"

    @abstractmethod
    async def execute(self, input_data: BatchQuoteRequest) -> BatchQuoteResult:
        """Refresh quotes for a batch of symbols."""
        pass

    @abstractmethod
    async def get_quote(self, symbol: str) -> Quote:
        """Current quote for one symbol."""
        pass

    @abstractmethod
    async def get_chart_series(self, symbol: str, interval_minutes: int) -> list[ChartPoint]:
        """Most recent chart points for one symbol."""
        pass

    @abstractmethod
    def set_credential(self, key: Optional[str]) -> None:
        pass

    @abstractmethod
    def get_credential(self) -> Optional[str]:
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass
