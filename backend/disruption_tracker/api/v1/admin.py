from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from disruption_tracker.api.deps import (
    get_store,
    get_cache,
    get_orchestrator,
    require_admin,
    envelope,
    error_response,
)
from disruption_tracker.api.v1.cron import refresh_payload
from disruption_tracker.schemas.feed import AdminStats
from disruption_tracker.services.cache import CacheKeys, CacheTTL

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])

RECENT_FETCH_LOGS = 30


@router.get("/stats")
async def admin_stats(store=Depends(get_store), cache=Depends(get_cache)):
    """Totals, breakdowns and recent fetch logs"""
    cached = cache.get(CacheKeys.ADMIN_STATS)
    if cached is not None:
        return envelope(cached, cached=True)

    try:
        aggregates = store.query_aggregates()
        stats = AdminStats(
            total_posts=aggregates.counts_by_type.get('social', 0),
            total_news=aggregates.counts_by_type.get('news', 0),
            last_fetch=store.query_last_successful_fetch_time(),
            fetch_logs=store.query_recent_fetch_logs(RECENT_FETCH_LOGS),
            category_breakdown=aggregates.counts_by_category,
            sentiment_breakdown=aggregates.counts_by_sentiment,
            top_sources=aggregates.top_sources,
        )
        cache.set(CacheKeys.ADMIN_STATS, stats, CacheTTL.ADMIN)
        return envelope(stats)

    except Exception as e:
        logger.exception(f"[API/admin/stats] {e}")
        return error_response("Failed to fetch admin stats")


@router.post("/refresh")
async def admin_refresh(orchestrator=Depends(get_orchestrator)):
    """Manual "refresh now" from the dashboard"""
    try:
        results = await orchestrator.refresh()
    except Exception as e:
        logger.exception(f"[API/admin/refresh] {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return refresh_payload(results)
