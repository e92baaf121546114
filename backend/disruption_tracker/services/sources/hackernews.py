import asyncio
from typing import List

from loguru import logger

from disruption_tracker.config import settings
from disruption_tracker.feed_config import HN_TOP_STORIES_URL, HN_ITEM_URL, HN_DISCUSSION_URL
from disruption_tracker.schemas.feed import FeedItemSchema
from disruption_tracker.services.feed_parser import strip_html
from disruption_tracker.services.http_client import HttpClient, UpstreamError
from disruption_tracker.services.sources.base import SourceAdapter, forum_engagement
from disruption_tracker.utils.content_hash import generate_item_id
from disruption_tracker.utils.retry import retry_async
from disruption_tracker.utils.timeutils import from_unix, utcnow


class HackerNewsAdapter(SourceAdapter):
    """
    Top stories from the Hacker News Firebase API

    The id index is fetched once (retried on failure), then stories are
    fetched concurrently in small batches with a pause in between.
    """

    item_type = 'social'

    def __init__(
        self,
        classifier,
        max_stories: int = None,
        batch_size: int = None,
        batch_delay: float = None,
        window_hours: int = None,
    ):
        super().__init__("Hacker News", classifier, window_hours)
        self.max_stories = max_stories or settings.HN_MAX_STORIES
        self.batch_size = batch_size or settings.HN_BATCH_SIZE
        self.batch_delay = settings.HN_BATCH_DELAY if batch_delay is None else batch_delay

    async def fetch(self, http: HttpClient) -> List[FeedItemSchema]:
        ids = await retry_async(
            lambda: http.get_json(HN_TOP_STORIES_URL),
            max_attempts=2,
            exceptions=(UpstreamError,),
            label="[HN] topstories",
        )
        ids = list(ids or [])[:self.max_stories]

        now = utcnow()
        items = []
        failed = 0
        for start in range(0, len(ids), self.batch_size):
            batch = ids[start:start + self.batch_size]
            results = await asyncio.gather(
                *(http.get_json(HN_ITEM_URL.format(id=story_id)) for story_id in batch),
                return_exceptions=True,
            )

            for story in results:
                if isinstance(story, Exception):
                    failed += 1
                    continue
                item = self._to_item(story, now)
                if item:
                    items.append(item)

            if start + self.batch_size < len(ids):
                await asyncio.sleep(self.batch_delay)

        if failed:
            logger.warning(f"[HN] {failed} story fetches failed")
        logger.info(f"[HN] {len(items)} relevant stories")
        return items

    def _to_item(self, story, now):
        if not isinstance(story, dict):
            return None
        if story.get('type') != 'story' or story.get('deleted') or story.get('dead'):
            return None
        if not story.get('title') or not story.get('time'):
            return None

        story_id = story['id']
        title = story['title']
        text = strip_html(story.get('text') or '')
        score = int(story.get('score') or 0)
        comments = int(story.get('descendants') or 0)

        return self.build_item(
            id=generate_item_id('hn', story_id),
            title=title,
            body=text,
            content=text[:400] or title,
            author=story.get('by') or 'Anonymous',
            source='Hacker News',
            url=story.get('url') or HN_DISCUSSION_URL.format(id=story_id),
            engagement_score=forum_engagement(score, comments),
            likes=score,
            replies=comments,
            published_at=from_unix(story['time']),
            now=now,
        )
