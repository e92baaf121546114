"""
Process-local TTL cache for read endpoints.

Built once at startup and handed to request handlers through FastAPI
dependencies; refreshes invalidate it.
"""

import threading
import time
from typing import Any, Dict, Optional, Tuple


class CacheKeys:
    FEED_PREFIX = 'feed:'
    FEED_ALL = 'feed:all'
    FEED_SOCIAL = 'feed:social'
    FEED_NEWS = 'feed:news'
    TRENDING = 'trending'
    SIDEBAR_STATS = 'sidebar:stats'
    KEYWORDS = 'keywords'
    ADMIN_STATS = 'admin:stats'
    TOP_DISRUPTION = 'top:disruption'

    @classmethod
    def feed(cls, type_filter: Optional[str]) -> str:
        return f"{cls.FEED_PREFIX}{type_filter or 'all'}"


class CacheTTL:
    """Lifetimes in seconds"""
    FEED = 30 * 60
    TRENDING = 15 * 60
    ADMIN = 5 * 60
    KEYWORDS = 20 * 60


class MemoryCache:
    """Thread-safe key/value store with per-entry expiry"""

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """Value for key, or None when missing or expired (expired entries are evicted)"""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl_seconds)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def invalidate_prefix(self, prefix: str) -> int:
        with self._lock:
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
            return len(doomed)

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
