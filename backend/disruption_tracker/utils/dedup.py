import re
from typing import Iterable, List, Optional, TypeVar

T = TypeVar("T")

TITLE_KEY_LENGTH = 60

_NON_ALNUM = re.compile(r'[^a-z0-9]')


def title_key(title: str) -> str:
    """
    Fuzzy key for near-duplicate detection

    Lower-cases the title, strips everything that is not [a-z0-9] and keeps the
    first 60 characters. Differently phrased headlines get different keys.
    """
    return _NON_ALNUM.sub('', (title or '').lower())[:TITLE_KEY_LENGTH]


def deduplicate(items: Iterable[T]) -> List[T]:
    """
    Keep the first item per title key, in input order

    Callers that care which duplicate survives should order by source
    priority before calling this.
    """
    seen = set()
    unique = []
    for item in items:
        key = title_key(item.title)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def rank_items(items: Iterable[T], limit: Optional[int] = None) -> List[T]:
    """Stable sort by engagement score, highest first, optionally capped."""
    ranked = sorted(items, key=lambda item: item.engagement_score, reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return ranked
