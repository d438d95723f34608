"""
In-memory quote cache.

Holds the latest Quote per symbol together with the moment it was fetched.
Entries are replaced on every fetch and never evicted; the symbol universe
is small and fixed, so staleness is decided at read time against a TTL.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from nseticker.schemas.market import Quote

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 30.0


@dataclass(frozen=True)
class CacheEntry:
    quote: Quote
    fetched_at: float


class QuoteCache:
    """
    Symbol -> CacheEntry store with TTL-based freshness.

    Usage:
        cache = QuoteCache(ttl=30)
        entry = cache.get("TATASTEEL")
        if entry is None or not cache.is_fresh(entry, cache.now()):
            cache.put("TATASTEEL", quote, cache.now())

    ``lock(symbol)`` hands out one asyncio.Lock per symbol so callers can
    keep a single upstream fetch in flight per symbol.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    def now(self) -> float:
        return self._clock()

    def get(self, symbol: str) -> Optional[CacheEntry]:
        return self._entries.get(symbol.upper())

    def put(self, symbol: str, quote: Quote, now: Optional[float] = None) -> CacheEntry:
        """Replace the entry for ``symbol``."""
        entry = CacheEntry(quote=quote, fetched_at=self.now() if now is None else now)
        self._entries[symbol.upper()] = entry
        logger.debug(f"Cached {symbol.upper()} (synthetic={quote.is_synthetic})")
        return entry

    def is_fresh(self, entry: CacheEntry, now: float, ttl: Optional[float] = None) -> bool:
        ttl = self._ttl if ttl is None else ttl
        return now - entry.fetched_at < ttl

    def fresh_quote(self, symbol: str, now: Optional[float] = None) -> Optional[Quote]:
        """Cached quote for ``symbol`` if it is still within the TTL."""
        entry = self.get(symbol)
        if entry is None:
            return None
        if not self.is_fresh(entry, self.now() if now is None else now):
            return None
        return entry.quote

    def lock(self, symbol: str) -> asyncio.Lock:
        key = symbol.upper()
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, symbol: str) -> bool:
        return symbol.upper() in self._entries
