from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger

from disruption_tracker.api.deps import get_store, get_orchestrator, require_admin, envelope, error_response
from disruption_tracker.schemas.funding import FundingFilters, FundingListResponse
from disruption_tracker.services.funding_seed import seed_funding_data

router = APIRouter(prefix="/funding", tags=["funding"])

MAX_FUNDING_PAGE = 500


def funding_filters(
    search: str = '',
    industry: str = '',
    stage: str = '',
    location: str = '',
    year: str = '',
    sort: str = 'date',
    order: str = 'desc',
    limit: int = Query(200, ge=1),
    offset: int = Query(0, ge=0),
) -> FundingFilters:
    """Query parameters as FundingFilters; unknown sort/order fall back to defaults"""
    return FundingFilters(
        search=search.strip(),
        industry=industry,
        stage=stage,
        location=location,
        year=year,
        sort=sort if sort in ('date', 'amount', 'company') else 'date',
        order=order if order in ('asc', 'desc') else 'desc',
        limit=min(limit, MAX_FUNDING_PAGE),
        offset=offset,
    )


@router.get("")
async def list_funding_rounds(filters: FundingFilters = Depends(funding_filters), store=Depends(get_store)):
    """Filtered, sorted funding rounds; the curated set is seeded on first use"""
    try:
        seed_funding_data(store)
        rounds = store.query_funding_rounds(filters)
        total = store.count_funding_rounds(filters)
        return FundingListResponse(rounds=rounds, total=total)

    except Exception as e:
        logger.exception(f"[API/funding] {e}")
        return error_response("Failed to fetch funding rounds", data=[])


@router.get("/stats")
async def funding_stats(store=Depends(get_store)):
    """Totals and breakdowns by industry, stage and month"""
    try:
        seed_funding_data(store)
        return envelope(store.query_funding_stats())

    except Exception as e:
        logger.exception(f"[API/funding/stats] {e}")
        return error_response("Failed to fetch funding stats")


@router.post("/refresh", dependencies=[Depends(require_admin)])
async def refresh_funding(orchestrator=Depends(get_orchestrator)):
    """Seed if needed, then pull fresh rounds from the funding feeds"""
    try:
        seeded, result = await orchestrator.refresh_funding()
    except Exception as e:
        logger.exception(f"[API/funding/refresh] {e}")
        raise HTTPException(status_code=500, detail="Refresh failed")

    return {"ok": True, "seeded": seeded, **result.model_dump()}
