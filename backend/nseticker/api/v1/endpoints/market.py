"""
Market Data API Endpoints

Quotes, intraday charts and the upstream credential for the dashboard.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from nseticker.core.config import settings
from nseticker.schemas.market import (
    ChartSeriesResponse,
    CredentialStatus,
    CredentialUpdate,
    Granularity,
    Quote,
    SymbolListing,
)
from nseticker.services.base import UnknownSymbol
from nseticker.services.market_data import MarketDataService
from nseticker.services.market_data.symbols import list_symbols, require_symbol

router = APIRouter()


def get_market_data_service(request: Request) -> MarketDataService:
    """The service instance built in the application lifespan."""
    return request.app.state.market_data_service


def _check_symbol(symbol: str) -> str:
    symbol = symbol.upper().strip()
    if settings.allow_unknown_symbols:
        return symbol
    try:
        return require_symbol(symbol).symbol
    except UnknownSymbol as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/symbols", response_model=list[SymbolListing])
async def get_symbols():
    """Symbols served by the dashboard, in display order."""
    return [
        SymbolListing(symbol=info.symbol, display_name=info.display_name)
        for info in list_symbols()
    ]


@router.get("/quote/{symbol}", response_model=Quote)
async def get_quote(
    symbol: str,
    service: MarketDataService = Depends(get_market_data_service),
):
    """
    Get current quote for a single symbol.

    Always answers for a known symbol; synthetic data is flagged with
    ``is_synthetic``.
    """
    return await service.get_quote(_check_symbol(symbol))


@router.get("/quotes")
async def get_quotes(
    symbols: Optional[str] = Query(default=None, description="Comma-separated symbols; all when omitted"),
    service: MarketDataService = Depends(get_market_data_service),
):
    """
    Get quotes for multiple symbols, fetched concurrently.
    """
    symbol_list = None
    if symbols:
        symbol_list = [_check_symbol(s) for s in symbols.split(",") if s.strip()]

    quotes = await service.get_quotes(symbol_list)
    return {"quotes": [q.model_dump(mode="json") for q in quotes]}


@router.get("/chart/{symbol}", response_model=ChartSeriesResponse)
async def get_chart(
    symbol: str,
    interval: int = Query(default=1, ge=1, le=240, description="Bar interval in minutes"),
    service: MarketDataService = Depends(get_market_data_service),
):
    """
    Get the most recent intraday bars for a symbol.

    The interval is rounded up to the nearest supported granularity.
    """
    symbol = _check_symbol(symbol)
    points = await service.get_chart_series(symbol, interval)
    return ChartSeriesResponse(
        symbol=symbol,
        interval_minutes=interval,
        granularity=Granularity.for_minutes(interval),
        points=points,
    )


@router.put("/credential", response_model=CredentialStatus)
async def set_credential(
    update: CredentialUpdate,
    service: MarketDataService = Depends(get_market_data_service),
):
    """Set the upstream API key for this session (kept in memory only)."""
    service.set_credential(update.api_key)
    return CredentialStatus(configured=service.get_credential() is not None)


@router.get("/credential", response_model=CredentialStatus)
async def get_credential(
    service: MarketDataService = Depends(get_market_data_service),
):
    """Whether an API key is configured. The key itself is never returned."""
    return CredentialStatus(configured=service.get_credential() is not None)
