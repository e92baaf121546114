from typing import List

from loguru import logger

from disruption_tracker.feed_config import RSS_ACCEPT
from disruption_tracker.schemas.feed import FeedItemSchema
from disruption_tracker.services.feed_parser import parse_feed
from disruption_tracker.services.http_client import HttpClient
from disruption_tracker.services.sources.base import SourceAdapter, news_engagement
from disruption_tracker.utils.content_hash import generate_item_id
from disruption_tracker.utils.timeutils import utcnow


class RSSFeedAdapter(SourceAdapter):
    """
    One RSS 2.0 or Atom news feed

    Items are scored by the feed's priority, with a bonus when the classifier
    puts them in a specific category.
    """

    item_type = 'news'

    def __init__(self, url: str, source: str, priority: int, classifier, window_hours: int = None):
        super().__init__(source, classifier, window_hours)
        self.url = url
        self.source = source
        self.priority = priority

    async def fetch(self, http: HttpClient) -> List[FeedItemSchema]:
        body = await http.get_bytes(self.url, headers={"Accept": RSS_ACCEPT})
        entries = parse_feed(body)

        now = utcnow()
        items = []
        for entry in entries:
            item = self.build_item(
                id=generate_item_id('rss', url=entry.link),
                title=entry.title,
                body=entry.description,
                content=entry.description,
                author=entry.author or self.source,
                source=self.source,
                url=entry.link,
                image_url=entry.image_url,
                engagement_score=lambda category: news_engagement(self.priority, category),
                published_at=entry.published,
                now=now,
            )
            if item:
                items.append(item)

        logger.info(f"[RSS] {self.source}: {len(items)}/{len(entries)} relevant items from {self.url}")
        return items
