"""
Background quote refresher.

Batch-refreshes the whole symbol universe on a fixed timer so the cache is
warm when the dashboard asks. A refresh that is still running when the
timer fires is not cancelled; the next batch simply starts.
"""

import asyncio
import logging
from typing import Optional

from nseticker.services.market_data.service import MarketDataService

logger = logging.getLogger(__name__)


class QuoteRefresher:
    """
    Periodic batch refresh.

    Usage:
        refresher = QuoteRefresher(service, interval=30)
        await refresher.start()
        ...
        await refresher.stop()
    """

    def __init__(self, service: MarketDataService, interval: float = 30.0):
        self._service = service
        self._interval = interval
        self._task: Optional[asyncio.Task] = None
        self._running = False
        self.cycles = 0

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> bool:
        if self._running:
            logger.warning("Quote refresher already running")
            return True

        self._running = True
        self._task = asyncio.create_task(self._refresh_loop())
        logger.info(f"Quote refresher started (every {self._interval:.0f}s)")
        return True

    async def stop(self) -> None:
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        logger.info("Quote refresher stopped")

    async def refresh_once(self) -> None:
        quotes = await self._service.get_quotes()
        self.cycles += 1
        synthetic = [q.symbol for q in quotes if q.is_synthetic]
        if synthetic:
            logger.info(f"Refreshed {len(quotes)} quotes, synthetic: {', '.join(synthetic)}")
        else:
            logger.debug(f"Refreshed {len(quotes)} quotes")

    async def _refresh_loop(self) -> None:
        while self._running:
            try:
                await self.refresh_once()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"Refresh loop error: {e}")
            await asyncio.sleep(self._interval)
