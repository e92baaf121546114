from disruption_tracker.utils.content_hash import generate_content_hash, generate_item_id, slugify
from disruption_tracker.utils.dedup import deduplicate, rank_items, title_key
from disruption_tracker.utils.retry import retry_async
from disruption_tracker.utils.timeutils import utcnow, to_naive_utc, from_unix, isoformat_utc

__all__ = [
    "generate_content_hash",
    "generate_item_id",
    "slugify",
    "deduplicate",
    "rank_items",
    "title_key",
    "retry_async",
    "utcnow",
    "to_naive_utc",
    "from_unix",
    "isoformat_utc",
]
