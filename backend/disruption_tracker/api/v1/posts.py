from fastapi import APIRouter, Depends, Query
from typing import Literal, Optional
from loguru import logger

from disruption_tracker.api.deps import get_store, get_cache, get_orchestrator, envelope, error_response
from disruption_tracker.services.cache import CacheKeys, CacheTTL

router = APIRouter(tags=["feed"])

MAX_PAGE_SIZE = 100


@router.get("/posts")
async def list_posts(
    type_filter: Optional[Literal['social', 'news', 'tweet']] = Query(None, alias="type"),
    limit: int = Query(50, ge=1),
    offset: int = Query(0, ge=0),
    store=Depends(get_store),
    cache=Depends(get_cache),
    orchestrator=Depends(get_orchestrator),
):
    """
    Ranked live feed items

    Only the first page is cached. When nothing is live yet, one refresh is
    run inline before answering.
    """
    if type_filter == 'tweet':
        type_filter = 'social'
    limit = min(limit, MAX_PAGE_SIZE)
    cache_key = CacheKeys.feed(type_filter)

    if offset == 0:
        cached = cache.get(cache_key)
        if cached is not None:
            return envelope(cached[:limit], cached=True)

    try:
        items = store.query_feed_items(type_filter, limit, offset)

        if not items and offset == 0:
            logger.info("[API/posts] No live items, running on-demand refresh")
            try:
                await orchestrator.refresh()
            except Exception as e:
                logger.error(f"[API/posts] On-demand refresh failed: {e}")
            items = store.query_feed_items(type_filter, limit, offset)

        if offset == 0:
            cache.set(cache_key, items, CacheTTL.FEED)

        return envelope(items)

    except Exception as e:
        logger.exception(f"[API/posts] {e}")
        return error_response("Failed to fetch posts", data=[])
