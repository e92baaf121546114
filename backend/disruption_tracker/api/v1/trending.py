from fastapi import APIRouter, Depends
from loguru import logger

from disruption_tracker.api.deps import get_store, get_cache, envelope, error_response
from disruption_tracker.schemas.feed import SidebarStats
from disruption_tracker.services.aggregates import summarize_disruption
from disruption_tracker.services.cache import CacheKeys, CacheTTL
from disruption_tracker.utils.timeutils import utcnow

router = APIRouter(tags=["feed"])

SIDEBAR_COMPANIES = 10
SIDEBAR_ITEM_WINDOW = 200


@router.get("/trending")
async def sidebar_stats(store=Depends(get_store), cache=Depends(get_cache)):
    """Trending companies plus layoff and funding totals over the top live items"""
    cached = cache.get(CacheKeys.SIDEBAR_STATS)
    if cached is not None:
        return envelope(cached, cached=True)

    try:
        companies = store.query_trending_companies(SIDEBAR_COMPANIES)
        items = store.query_feed_items(None, SIDEBAR_ITEM_WINDOW, 0)
        last_fetch = store.query_last_successful_fetch_time()
        totals = summarize_disruption(items)

        stats = SidebarStats(
            trending_companies=companies,
            total_layoffs=totals['total_layoffs'],
            total_funding=totals['total_funding'],
            last_refreshed=last_fetch or utcnow(),
            total_items=len(items),
        )
        cache.set(CacheKeys.SIDEBAR_STATS, stats, CacheTTL.TRENDING)
        return envelope(stats)

    except Exception as e:
        logger.exception(f"[API/trending] {e}")
        return error_response("Failed to fetch trending data")


@router.get("/top-disruption")
async def top_disruption(store=Depends(get_store), cache=Depends(get_cache)):
    """Highest-scoring categorized live item, or null"""
    cached = cache.get(CacheKeys.TOP_DISRUPTION)
    if cached is not None:
        return envelope(cached, cached=True)

    try:
        item = store.get_top_item()
        if item is not None:
            cache.set(CacheKeys.TOP_DISRUPTION, item, CacheTTL.TRENDING)
        return envelope(item)

    except Exception as e:
        logger.exception(f"[API/top-disruption] {e}")
        return error_response("Failed to fetch top disruption")


@router.get("/keywords")
async def keyword_counts(store=Depends(get_store), cache=Depends(get_cache)):
    """Tag frequencies over live items"""
    cached = cache.get(CacheKeys.KEYWORDS)
    if cached is not None:
        return envelope(cached, cached=True)

    try:
        counts = store.query_keyword_counts()
        cache.set(CacheKeys.KEYWORDS, counts, CacheTTL.KEYWORDS)
        return envelope(counts)

    except Exception as e:
        logger.exception(f"[API/keywords] {e}")
        return error_response("Failed to fetch keywords", data=[])
