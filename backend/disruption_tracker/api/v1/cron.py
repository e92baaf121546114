from fastapi import APIRouter, Depends
from loguru import logger

from disruption_tracker.api.deps import get_orchestrator, require_cron, timestamp
from disruption_tracker.schemas.feed import RefreshResults

router = APIRouter(prefix="/cron", tags=["refresh"])


def refresh_payload(results: RefreshResults) -> dict:
    """Response body shared by the cron and admin refresh endpoints"""
    return {
        "success": True,
        "results": {
            "tweets": results.social,
            "news": results.news,
            "errors": results.errors,
        },
        "duration": results.duration_ms,
        "timestamp": timestamp(),
    }


@router.api_route("/refresh", methods=["GET", "POST"], dependencies=[Depends(require_cron)])
async def cron_refresh(orchestrator=Depends(get_orchestrator)):
    """Run a full refresh; called by an external cron"""
    results = await orchestrator.refresh()
    logger.info(f"[Cron] Refresh complete in {results.duration_ms}ms")
    return refresh_payload(results)
