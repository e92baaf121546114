import hashlib
import re
from typing import Union


def generate_content_hash(content: Union[str, bytes]) -> str:
    """
    Generate SHA-256 hash of content for stable identifiers

    Args:
        content: Text or bytes to hash

    Returns:
        Hexadecimal hash string
    """
    if isinstance(content, str):
        content = content.encode('utf-8')

    return hashlib.sha256(content).hexdigest()


def generate_item_id(prefix: str, native_id: Union[str, int, None] = None, url: str = None) -> str:
    """
    Build a feed item id that is stable across repeated fetches

    Native ids are used as-is; otherwise the origin URL is hashed. The prefix
    keeps ids from different source families apart.

    Args:
        prefix: Source tag such as 'rd', 'hn', 'tw' or 'rss'
        native_id: Upstream identifier, when the source has one
        url: Origin URL, hashed when no native id exists

    Returns:
        Identifier like 'rd_abc123' or 'rss_<20 hex chars>'
    """
    if native_id not in (None, ''):
        return f"{prefix}_{native_id}"
    if not url:
        raise ValueError("Either native_id or url is required to build an item id")
    return f"{prefix}_{generate_content_hash(url.strip())[:20]}"


def slugify(value: str) -> str:
    """Lower-case slug with runs of non-alphanumerics collapsed to '-'."""
    return re.sub(r'[^a-z0-9]+', '-', value.lower()).strip('-')
