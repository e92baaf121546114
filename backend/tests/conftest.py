"""
Shared fixtures: an in-memory store, a fake HTTP client and item factories.
"""

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from disruption_tracker.database import init_db
from disruption_tracker.nlp import TextClassifier
from disruption_tracker.schemas.feed import FeedItemSchema
from disruption_tracker.services.cache import MemoryCache
from disruption_tracker.services.http_client import UpstreamError
from disruption_tracker.services.store import FeedStore
from disruption_tracker.utils.timeutils import utcnow


class FakeHttpClient:
    """
    Stands in for HttpClient

    `responses` maps URL (or URL prefix) to a payload: dict/list for JSON,
    str/bytes for feeds, or an exception instance to raise.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.requests = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return None

    def _lookup(self, url):
        self.requests.append(url)
        if url in self.responses:
            payload = self.responses[url]
        else:
            matches = [key for key in self.responses if url.startswith(key)]
            if not matches:
                raise UpstreamError("HTTP 404", url=url, status=404)
            payload = self.responses[max(matches, key=len)]

        if isinstance(payload, Exception):
            raise payload
        return payload

    async def get_json(self, url, headers=None):
        return self._lookup(url)

    async def get_bytes(self, url, headers=None):
        payload = self._lookup(url)
        return payload.encode('utf-8') if isinstance(payload, str) else payload


def rss_date(hours_ago: float) -> str:
    return format_datetime(datetime.now(timezone.utc) - timedelta(hours=hours_ago), usegmt=True)


def rss_document(*items: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/" '
        'xmlns:dc="http://purl.org/dc/elements/1.1/" '
        'xmlns:content="http://purl.org/rss/1.0/modules/content/"><channel><title>Test feed</title>'
        + ''.join(items)
        + '</channel></rss>'
    )


def rss_item(title, link, description='', hours_ago=1.0, extra=''):
    return (
        f'<item><title>{title}</title><link>{link}</link>'
        f'<description><![CDATA[{description}]]></description>'
        f'<pubDate>{rss_date(hours_ago)}</pubDate>{extra}</item>'
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return FeedStore(engine)


@pytest.fixture
def cache():
    return MemoryCache()


@pytest.fixture
def classifier():
    return TextClassifier()


@pytest.fixture
def make_item():
    """Factory for FeedItemSchema with sensible defaults"""
    def _make(item_id='rd_1', **overrides):
        now = utcnow()
        values = dict(
            id=item_id,
            type='social',
            title=f"OpenAI item {item_id}",
            content='',
            author='u/tester',
            source='r/OpenAI',
            url=f"https://reddit.com/{item_id}",
            engagement_score=10.0,
            category='General',
            sentiment='neutral',
            tags=['OpenAI'],
            published_at=now - timedelta(hours=1),
            created_at=now,
        )
        values.update(overrides)
        return FeedItemSchema(**values)
    return _make
