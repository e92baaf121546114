"""
Request dependencies and response envelopes shared by the v1 routers.

Services are created once in the application lifespan and stored on
app.state; handlers receive them through these dependencies.
"""

import hmac
from typing import Any, Optional

from fastapi import Header, HTTPException, Request, status
from fastapi.responses import JSONResponse

from disruption_tracker.config import settings
from disruption_tracker.schemas.common import APIResponse, ErrorResponse
from disruption_tracker.services.cache import MemoryCache
from disruption_tracker.services.ingestion import IngestionOrchestrator
from disruption_tracker.services.store import FeedStore
from disruption_tracker.utils.timeutils import utcnow, isoformat_utc


def get_store(request: Request) -> FeedStore:
    return request.app.state.store


def get_cache(request: Request) -> MemoryCache:
    return request.app.state.cache


def get_orchestrator(request: Request) -> IngestionOrchestrator:
    return request.app.state.orchestrator


def get_scheduler(request: Request):
    return getattr(request.app.state, 'scheduler', None)


def _matches(provided: Optional[str], expected: str) -> bool:
    return provided is not None and hmac.compare_digest(provided.encode(), expected.encode())


def require_admin(x_admin_secret: Optional[str] = Header(None)):
    """Checks the x-admin-secret header when ADMIN_SECRET is configured"""
    if settings.ADMIN_SECRET and not _matches(x_admin_secret, settings.ADMIN_SECRET):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def require_cron(authorization: Optional[str] = Header(None)):
    """Checks 'Authorization: Bearer <CRON_SECRET>' when CRON_SECRET is configured"""
    if settings.CRON_SECRET and not _matches(authorization, f"Bearer {settings.CRON_SECRET}"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def timestamp() -> str:
    return isoformat_utc(utcnow())


def envelope(data: Any, cached: bool = False) -> APIResponse:
    return APIResponse(data=data, cached=cached, timestamp=timestamp())


def error_response(message: str, data: Any = None) -> JSONResponse:
    body = ErrorResponse(error=message, data=data, cached=False, timestamp=timestamp())
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump())
