"""
RSS 2.0 / Atom parsing.

Wraps feedparser so the adapters see one flat entry shape regardless of the
feed dialect. feedparser copes with CDATA, namespaces, and the usual
malformed markup; BeautifulSoup handles the HTML embedded in descriptions.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Union

import feedparser
from bs4 import BeautifulSoup
from loguru import logger

from disruption_tracker.utils.timeutils import utcnow

MAX_DESCRIPTION_LENGTH = 600

_IMAGE_BLOCKLIST = ('spacer', 'pixel', 'tracking')


class FeedParseError(Exception):
    """Raised when a payload cannot be read as a feed at all"""


@dataclass
class ParsedEntry:
    title: str
    link: str
    description: str
    published: datetime
    author: str = ''
    image_url: Optional[str] = None


def strip_html(fragment: str) -> str:
    """Plain text of an HTML fragment, whitespace collapsed"""
    if not fragment:
        return ''
    if '<' not in fragment and '&' not in fragment:
        return ' '.join(fragment.split())
    text = BeautifulSoup(fragment, 'lxml').get_text(separator=' ', strip=True)
    return ' '.join(text.split())


def first_image_in_html(html: str) -> Optional[str]:
    """
    First usable <img> source in an HTML blob

    Only absolute http(s) URLs count; spacers, tracking pixels and GIFs are
    skipped.
    """
    if not html or '<img' not in html.lower():
        return None

    soup = BeautifulSoup(html, 'lxml')
    for img in soup.find_all('img', src=True):
        src = img['src'].strip()
        lowered = src.lower()
        if not lowered.startswith('http'):
            continue
        if any(marker in lowered for marker in _IMAGE_BLOCKLIST) or lowered.endswith('.gif'):
            continue
        return src
    return None


def _first_url(candidates, key: str) -> Optional[str]:
    for candidate in candidates or []:
        url = (candidate.get(key) or '').strip()
        if url:
            return url
    return None


def extract_image(entry) -> Optional[str]:
    """
    Image for an entry, tried in order: media:content, media:thumbnail,
    enclosure, then the first <img> in content:encoded or the description.
    """
    image = (
        _first_url(entry.get('media_content'), 'url')
        or _first_url(entry.get('media_thumbnail'), 'url')
        or _first_url(entry.get('enclosures'), 'href')
    )
    if image:
        return image

    for block in entry.get('content') or []:
        image = first_image_in_html(block.get('value', ''))
        if image:
            return image

    return first_image_in_html(entry.get('summary', ''))


def _entry_description(entry) -> str:
    raw = entry.get('summary') or ''
    if not raw:
        blocks = entry.get('content') or []
        raw = blocks[0].get('value', '') if blocks else ''
    return strip_html(raw)[:MAX_DESCRIPTION_LENGTH]


def _entry_published(entry) -> Optional[datetime]:
    """
    Publication time as naive UTC

    Falls back to the updated date, then to now when the entry carries no
    date at all. An explicit date that cannot be parsed yields None.
    """
    for parsed_key, raw_key in (('published_parsed', 'published'), ('updated_parsed', 'updated')):
        parsed = entry.get(parsed_key)
        if parsed:
            return datetime(*parsed[:6])
        if entry.get(raw_key):
            return None
    return utcnow()


def _entry_author(entry) -> str:
    author = entry.get('author') or ''
    if not author:
        author = (entry.get('author_detail') or {}).get('name', '')
    return strip_html(author)


def parse_entry(entry) -> Optional[ParsedEntry]:
    """Flatten one feedparser entry; None when title or link is missing"""
    title = strip_html(entry.get('title', ''))
    link = (entry.get('link') or '').strip()
    if not title or not link:
        return None

    published = _entry_published(entry)
    if published is None:
        logger.debug(f"Skipping entry with unparseable date: {link}")
        return None

    return ParsedEntry(
        title=title,
        link=link,
        description=_entry_description(entry),
        published=published,
        author=_entry_author(entry),
        image_url=extract_image(entry),
    )


def parse_feed(content: Union[str, bytes]) -> List[ParsedEntry]:
    """
    Parse an RSS 2.0 or Atom document into flat entries

    Args:
        content: Raw feed payload

    Returns:
        Entries that have both a title and a link

    Raises:
        FeedParseError: when nothing could be parsed and feedparser flagged
            the document as malformed
    """
    feed = feedparser.parse(content)

    if feed.bozo and not feed.entries:
        raise FeedParseError(f"Parse error: {feed.get('bozo_exception')}")

    entries = []
    for entry in feed.entries:
        parsed = parse_entry(entry)
        if parsed:
            entries.append(parsed)
    return entries
