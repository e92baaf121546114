from disruption_tracker.services.cache import MemoryCache, CacheKeys, CacheTTL
from disruption_tracker.services.http_client import HttpClient, UpstreamError
from disruption_tracker.services.store import FeedStore
from disruption_tracker.services.ingestion import IngestionOrchestrator

__all__ = [
    "MemoryCache",
    "CacheKeys",
    "CacheTTL",
    "HttpClient",
    "UpstreamError",
    "FeedStore",
    "IngestionOrchestrator",
]
