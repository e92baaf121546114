from datetime import datetime
from typing import List, Optional
from urllib.parse import urlencode

from loguru import logger

from disruption_tracker.config import settings
from disruption_tracker.feed_config import X_RECENT_SEARCH_URL
from disruption_tracker.schemas.feed import FeedItemSchema
from disruption_tracker.services.http_client import HttpClient
from disruption_tracker.services.sources.base import SourceAdapter, search_engagement
from disruption_tracker.utils.content_hash import generate_item_id
from disruption_tracker.utils.timeutils import to_naive_utc, utcnow


def _parse_created_at(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return to_naive_utc(datetime.fromisoformat(value.replace('Z', '+00:00')))
    except ValueError:
        return None


class XSearchAdapter(SourceAdapter):
    """Recent-search results from the X API v2 (needs a bearer token)"""

    item_type = 'social'

    def __init__(self, classifier, bearer_token: str, query: str = None, window_hours: int = None):
        super().__init__("X", classifier, window_hours)
        self.bearer_token = bearer_token
        self.query = query or settings.X_SEARCH_QUERY

    def search_url(self) -> str:
        params = {
            'query': self.query,
            'max_results': 100,
            'tweet.fields': 'created_at,public_metrics,author_id',
            'expansions': 'author_id',
            'user.fields': 'username,name',
        }
        return f"{X_RECENT_SEARCH_URL}?{urlencode(params)}"

    async def fetch(self, http: HttpClient) -> List[FeedItemSchema]:
        payload = await http.get_json(
            self.search_url(),
            headers={"Authorization": f"Bearer {self.bearer_token}"},
        ) or {}

        users = {
            user.get('id'): user.get('username') or user.get('name') or 'unknown'
            for user in (payload.get('includes') or {}).get('users') or []
        }

        now = utcnow()
        items = []
        for tweet in payload.get('data') or []:
            item = self._to_item(tweet, users, now)
            if item:
                items.append(item)

        logger.info(f"[X] {len(items)} relevant posts")
        return items

    def _to_item(self, tweet: dict, users: dict, now):
        text = ' '.join((tweet.get('text') or '').split())
        published = _parse_created_at(tweet.get('created_at'))
        if not tweet.get('id') or not text or published is None:
            return None

        metrics = tweet.get('public_metrics') or {}
        likes = int(metrics.get('like_count') or 0)
        reposts = int(metrics.get('retweet_count') or 0)
        replies = int(metrics.get('reply_count') or 0)
        impressions = int(metrics.get('impression_count') or 0)
        username = users.get(tweet.get('author_id'), 'unknown')

        return self.build_item(
            id=generate_item_id('tw', tweet['id']),
            title=text[:160],
            body=text[160:],
            content=text[:500],
            author=f"@{username}",
            source='X',
            url=f"https://x.com/{username}/status/{tweet['id']}",
            engagement_score=search_engagement(likes, reposts, replies, impressions),
            likes=likes,
            reposts=reposts,
            replies=replies,
            views=impressions,
            published_at=published,
            now=now,
        )
