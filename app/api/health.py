"""Health check endpoint."""
import logging
from fastapi import APIRouter, Depends, Request

from app.core.config import Settings
from app.core.dependencies import get_settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(request: Request, app_settings: Settings = Depends(get_settings)):
    """Report service liveness and the pricing currency in use."""
    client = request.client.host if request.client else "unknown"
    logger.debug(f"[HEALTH] Health check requested - Client: {client}")
    return {
        "status": "healthy",
        "service": app_settings.app_name,
        "currency": app_settings.currency_code,
    }
