"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from nseticker.api.v1.endpoints import market

router = APIRouter()

# Include all endpoint routers
router.include_router(market.router, prefix="/market", tags=["Market Data"])
