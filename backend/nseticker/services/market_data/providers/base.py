"""
Provider Normalizer Interface

Each upstream provider family knows how to build its requests and how to
map its raw JSON into Quote / ChartPoint records. The service only talks
to this interface; the active provider is chosen by configuration.
"""

import logging
import math
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationError

from nseticker.schemas.market import ChartPoint, DataSource, Granularity, Quote
from nseticker.services.base import CredentialMissing, SchemaError
from nseticker.services.market_data.symbols import SymbolInfo

logger = logging.getLogger(__name__)

# (url, query params)
Request = tuple[str, dict]


class QuoteProvider(ABC):
    """
    Upstream provider contract.

    Subclasses implement request building and parsing; ``fetch_quote`` and
    ``fetch_series`` glue them to the transport. Parsing raises SchemaError
    for upstream error payloads and missing or non-numeric fields.
    """

    source: DataSource
    requires_credential: bool = False

    def __init__(self, transport: Any, base_url: str):
        self.transport = transport
        self.base_url = base_url

    @property
    def name(self) -> str:
        return self.source.value

    # ============ Requests ============

    @abstractmethod
    def quote_request(self, info: SymbolInfo, credential: Optional[str]) -> Request:
        pass

    @abstractmethod
    def series_request(
        self, info: SymbolInfo, granularity: Granularity, credential: Optional[str]
    ) -> Request:
        pass

    # ============ Normalization ============

    @abstractmethod
    def parse_quote(self, raw: Any, info: SymbolInfo) -> Quote:
        """Map a raw quote response to a Quote (without RSI)."""
        pass

    @abstractmethod
    def parse_series(self, raw: Any, granularity: Granularity) -> list[ChartPoint]:
        """Map a raw intraday response to chart points, oldest first."""
        pass

    async def quote_rsi(self, raw: Any, info: SymbolInfo, credential: Optional[str]) -> Optional[float]:
        """RSI to attach to a freshly parsed quote. None leaves it unset."""
        return None

    # ============ Fetching ============

    async def fetch_quote(self, info: SymbolInfo, credential: Optional[str]) -> Quote:
        self._check_credential(credential)
        url, params = self.quote_request(info, credential)
        raw = await self.transport.get_json(url, params)
        quote = self.parse_quote(raw, info)

        rsi_value = await self.quote_rsi(raw, info, credential)
        if rsi_value is not None:
            quote = quote.model_copy(update={"rsi": rsi_value})
        return quote

    async def fetch_series(
        self, info: SymbolInfo, granularity: Granularity, credential: Optional[str]
    ) -> list[ChartPoint]:
        self._check_credential(credential)
        url, params = self.series_request(info, granularity, credential)
        raw = await self.transport.get_json(url, params)
        return self.parse_series(raw, granularity)

    def _check_credential(self, credential: Optional[str]) -> None:
        if self.requires_credential and not credential:
            raise CredentialMissing(self.name, "API key required but not set")

    async def close(self) -> None:
        await self.transport.close()


def to_float(value: Any, field: str, provider: str) -> float:
    """Parse a numeric upstream field, raising SchemaError when absent, non-numeric or non-finite."""
    if value is None or value == "":
        raise SchemaError(provider, f"Missing field {field!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise SchemaError(provider, f"Non-numeric field {field!r}: {value!r}")
    if not math.isfinite(number):
        raise SchemaError(provider, f"Non-finite field {field!r}: {value!r}")
    return number


def build_point(
    timestamp: datetime,
    open_: float,
    high: float,
    low: float,
    close: float,
    volume: float,
) -> Optional[ChartPoint]:
    """
    Build a ChartPoint, or None for samples that cannot be plotted.

    A non-positive close is missing data, not an observation.
    """
    if close <= 0:
        return None
    try:
        return ChartPoint(
            timestamp=timestamp,
            open=open_,
            high=high,
            low=low,
            close=close,
            volume=int(volume),
        )
    except ValidationError as e:
        logger.debug(f"Dropping malformed sample at {timestamp}: {e.errors()[0]['msg']}")
        return None
