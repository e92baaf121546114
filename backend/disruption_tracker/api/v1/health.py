from fastapi import APIRouter, Depends
from pydantic import BaseModel
from loguru import logger

from disruption_tracker.api.deps import get_store, get_cache, get_scheduler, timestamp

router = APIRouter(tags=["health"])


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str
    timestamp: str
    database: str
    scheduler: str
    live_items: int
    cached_entries: int


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(store=Depends(get_store), cache=Depends(get_cache), scheduler=Depends(get_scheduler)):
    """Health check endpoint"""
    live_items = 0
    try:
        store.ping()
        live_items = store.count_live_items()
        db_status = "healthy"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        db_status = "error"

    if scheduler is None:
        scheduler_status = "disabled"
    else:
        scheduler_status = "running" if scheduler.is_running else "stopped"

    return HealthCheckResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        timestamp=timestamp(),
        database=db_status,
        scheduler=scheduler_status,
        live_items=live_items,
        cached_entries=cache.size(),
    )
