from typing import List

from loguru import logger

from disruption_tracker.feed_config import REDDIT_HOT_URL
from disruption_tracker.schemas.feed import FeedItemSchema
from disruption_tracker.services.http_client import HttpClient
from disruption_tracker.services.sources.base import SourceAdapter, forum_engagement, estimate_views
from disruption_tracker.utils.content_hash import generate_item_id
from disruption_tracker.utils.timeutils import from_unix, utcnow


class SubredditAdapter(SourceAdapter):
    """Hot listing of one subreddit via the public JSON endpoint"""

    item_type = 'social'

    def __init__(self, subreddit: str, classifier, window_hours: int = None):
        super().__init__(f"r/{subreddit}", classifier, window_hours)
        self.subreddit = subreddit

    async def fetch(self, http: HttpClient) -> List[FeedItemSchema]:
        payload = await http.get_json(REDDIT_HOT_URL.format(sub=self.subreddit))
        children = ((payload or {}).get('data') or {}).get('children') or []

        now = utcnow()
        items = []
        for child in children:
            post = child.get('data') or {}
            if post.get('stickied') or not post.get('id') or not post.get('title'):
                continue

            item = self._to_item(post, now)
            if item:
                items.append(item)

        logger.info(f"[Reddit] r/{self.subreddit}: {len(items)} relevant posts")
        return items

    def _to_item(self, post: dict, now):
        title = post['title']
        selftext = post.get('selftext') or ''
        score = int(post.get('score') or 0)
        comments = int(post.get('num_comments') or 0)
        thumbnail = post.get('thumbnail') or ''

        return self.build_item(
            id=generate_item_id('rd', post['id']),
            title=title[:160],
            body=selftext,
            content=selftext[:500] or title,
            author=f"u/{post.get('author') or '[deleted]'}",
            source=f"r/{post.get('subreddit') or self.subreddit}",
            url=f"https://reddit.com{post.get('permalink', '')}",
            image_url=thumbnail if thumbnail.startswith('http') else None,
            engagement_score=forum_engagement(score, comments),
            likes=score,
            replies=comments,
            views=estimate_views(score, post.get('upvote_ratio')),
            published_at=from_unix(post.get('created_utc') or 0),
            now=now,
        )
