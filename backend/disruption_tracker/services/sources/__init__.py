from dataclasses import dataclass, field
from typing import List

from disruption_tracker.config import settings
from disruption_tracker.feed_config import SUBREDDITS, RSS_FEEDS
from disruption_tracker.nlp import TextClassifier
from disruption_tracker.services.sources.base import SourceAdapter
from disruption_tracker.services.sources.hackernews import HackerNewsAdapter
from disruption_tracker.services.sources.reddit import SubredditAdapter
from disruption_tracker.services.sources.rss import RSSFeedAdapter
from disruption_tracker.services.sources.x_search import XSearchAdapter


@dataclass
class SourceFamily:
    """A group of adapters refreshed, capped and logged together"""
    name: str  # FetchLog type: 'social' or 'news'
    label: str  # Prefix for error messages
    adapters: List[SourceAdapter] = field(default_factory=list)
    max_items: int = 100
    delay: float = 0.0


def build_source_families(classifier: TextClassifier) -> List[SourceFamily]:
    """Social and news families from the configured catalogs"""
    social: List[SourceAdapter] = [SubredditAdapter(sub, classifier) for sub in SUBREDDITS]
    social.append(HackerNewsAdapter(classifier))
    if settings.X_BEARER_TOKEN:
        social.append(XSearchAdapter(classifier, settings.X_BEARER_TOKEN))

    news: List[SourceAdapter] = [
        RSSFeedAdapter(feed.url, feed.source, feed.priority, classifier)
        for feed in RSS_FEEDS
    ]

    return [
        SourceFamily(
            name='social',
            label='Social',
            adapters=social,
            max_items=settings.SOCIAL_MAX_ITEMS,
            delay=settings.SOCIAL_REQUEST_DELAY,
        ),
        SourceFamily(
            name='news',
            label='News',
            adapters=news,
            max_items=settings.NEWS_MAX_ITEMS,
            delay=settings.NEWS_REQUEST_DELAY,
        ),
    ]


__all__ = [
    "SourceAdapter",
    "SourceFamily",
    "SubredditAdapter",
    "HackerNewsAdapter",
    "XSearchAdapter",
    "RSSFeedAdapter",
    "build_source_families",
]
