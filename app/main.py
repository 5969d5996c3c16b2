"""Main FastAPI application."""
from fastapi import Depends, FastAPI
from contextlib import asynccontextmanager

from app.core.config import Settings, settings
from app.core.dependencies import get_settings
from app.core.logging import setup_logging
from app.api import health, pricing


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    yield


app = FastAPI(
    title=settings.app_name,
    description="Order pricing and totals engine for food ordering checkout",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router, tags=["health"])
app.include_router(pricing.router, tags=["pricing"])


@app.get("/")
async def root(app_settings: Settings = Depends(get_settings)):
    """Service information."""
    return {
        "message": f"{app_settings.app_name} API",
        "version": "0.1.0",
        "currency": app_settings.currency_code,
    }
