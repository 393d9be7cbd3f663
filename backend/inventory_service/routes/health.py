"""
Inventory Service — Health Check Route
========================================

What:  Health probe for monitoring and load balancers.
How:   Reports the item count and whether the cache directory is writable.

Status levels:
    - healthy:   cache directory exists and is writable (HTTP 200)
    - degraded:  photo uploads would fail; JSON routes still work (HTTP 200)
"""

import logging
import time

from fastapi import APIRouter, Depends, Request

from inventory_service import __version__
from inventory_service.dependencies import get_photo_storage, get_store
from inventory_service.schemas.item import HealthResponse
from inventory_service.services.inventory_store import InventoryStore
from inventory_service.services.photo_storage import PhotoStorage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    request: Request,
    store: InventoryStore = Depends(get_store),
    photo_storage: PhotoStorage = Depends(get_photo_storage),
) -> HealthResponse:
    cache_status = "writable"
    overall = "healthy"

    if not photo_storage.is_writable():
        cache_status = "unavailable"
        overall = "degraded"
        logger.warning("Health check: cache directory %s is not writable", photo_storage.cache_dir)

    return HealthResponse(
        status=overall,
        version=__version__,
        items=len(store),
        cache=cache_status,
        uptime_seconds=round(time.time() - request.app.state.started_at, 2),
    )
