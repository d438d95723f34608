"""
HTTP transport for upstream market-data providers.

Thin wrapper over one aiohttp session. Every failure surfaces as
TransportError so the service has a single failure type to handle.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from nseticker.services.base import TransportError

logger = logging.getLogger(__name__)


class HttpTransport:
    """
    JSON-over-HTTP GET client.

    The session is created lazily on first request and must be closed
    with ``close()`` on shutdown. Any object exposing an awaitable
    ``get_json(url, params)`` can stand in for it.
    """

    def __init__(self, timeout_seconds: Optional[float] = None):
        self._timeout_seconds = timeout_seconds
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            kwargs: dict[str, Any] = {"headers": {"Accept": "application/json"}}
            if self._timeout_seconds is not None:
                kwargs["timeout"] = aiohttp.ClientTimeout(total=self._timeout_seconds)
            self._session = aiohttp.ClientSession(**kwargs)
        return self._session

    async def get_json(self, url: str, params: Optional[dict] = None) -> Any:
        """GET ``url`` and decode the body as JSON."""
        session = await self._ensure_session()
        try:
            async with session.get(url, params=params) as resp:
                if resp.status < 200 or resp.status >= 300:
                    body = await resp.text()
                    raise TransportError(
                        "HttpTransport",
                        f"HTTP {resp.status} from {url}",
                        {"status": resp.status, "body": body[:200]},
                    )
                # Alpha Vantage sometimes answers JSON with a text/plain content type
                return await resp.json(content_type=None)
        except TransportError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise TransportError("HttpTransport", f"GET {url} failed: {e}") from e

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("HTTP session closed")
