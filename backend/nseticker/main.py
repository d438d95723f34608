"""
NSE Ticker Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nseticker.core.config import settings
from nseticker.api.v1 import router as api_v1_router
from nseticker.services.market_data import QuoteRefresher, create_market_data_service

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    service = create_market_data_service(settings)
    app.state.market_data_service = service

    refresher = None
    if settings.enable_background_refresh:
        refresher = QuoteRefresher(service, interval=settings.refresh_interval_seconds)
        await refresher.start()
    else:
        logger.info("Background refresh disabled (enable_background_refresh=false)")

    yield

    # Shutdown
    logger.info("Shutting down...")
    if refresher:
        await refresher.stop()
    await service.close()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    NSE Ticker API

    ## Architecture
    - **Market Data**: Quotes and intraday bars from Alpha Vantage or Yahoo Finance
    - **Quote Cache**: 30 second per-symbol cache bounding upstream calls
    - **Indicators**: RSI from the provider or computed locally (NumPy)
    - **Fallback**: Synthetic data, flagged, whenever the upstream path fails
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
# Add any additional origins from settings
if settings.allowed_origins:
    cors_origins.extend([o for o in settings.allowed_origins if o not in cors_origins])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "provider": settings.market_data_provider,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "NSE Ticker Backend API",
        "docs": "/docs",
        "health": "/health",
    }
