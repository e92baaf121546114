"""
Common ground for source adapters.

An adapter turns one upstream (a subreddit, an RSS feed, the HN front page)
into normalized FeedItemSchema objects. Adapters raise on upstream failure;
isolation is the orchestrator's job.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import List, Optional

from disruption_tracker.config import settings
from disruption_tracker.nlp import TextClassifier
from disruption_tracker.schemas.feed import FeedItemSchema, FeedItemType, GENERAL
from disruption_tracker.services.http_client import HttpClient
from disruption_tracker.utils.timeutils import utcnow, to_naive_utc


def forum_engagement(score: int, comments: int) -> float:
    """Reddit / Hacker News score: upvotes plus 1.5 per comment, one decimal"""
    return round((score or 0) + (comments or 0) * 1.5, 1)


def estimate_views(score: int, upvote_ratio: Optional[float]) -> int:
    if upvote_ratio is None:
        return 0
    return max(0, round((score or 0) / max(upvote_ratio, 0.1)))


def search_engagement(likes: int, reposts: int, replies: int, impressions: int) -> float:
    return round(likes + reposts * 2 + replies * 1.5 + impressions * 0.1, 1)


def news_engagement(priority: int, category: str) -> float:
    """Feed priority, plus 20 when the item landed in a specific category"""
    return float(priority + (20 if category != GENERAL else 0))


class SourceAdapter(ABC):
    """Base class for every upstream the orchestrator pulls from"""

    item_type: FeedItemType = 'social'

    def __init__(self, name: str, classifier: TextClassifier, window_hours: int = None):
        self.name = name
        self.classifier = classifier
        self.window = timedelta(hours=window_hours or settings.INGESTION_WINDOW_HOURS)

    @abstractmethod
    async def fetch(self, http: HttpClient) -> List[FeedItemSchema]:
        """Pull, filter and classify items from the upstream"""

    def build_item(
        self,
        *,
        id: str,
        title: str,
        body: str,
        content: str,
        author: str,
        source: str,
        url: str,
        published_at: datetime,
        engagement_score=None,
        image_url: Optional[str] = None,
        likes: int = 0,
        reposts: int = 0,
        replies: int = 0,
        views: int = 0,
        now: Optional[datetime] = None,
    ) -> Optional[FeedItemSchema]:
        """
        Classify a raw upstream record into a FeedItemSchema

        Args:
            title: Headline, used with body for relevance and classification
            body: Extra text considered for classification only
            engagement_score: A float, or a callable taking the detected
                category and returning the score
            now: Reference time for the ingestion window

        Returns:
            The item, or None when it is outside the window or not AI-relevant
        """
        now = now or utcnow()
        published_at = to_naive_utc(published_at)
        if published_at < now - self.window:
            return None

        text = f"{title} {body or ''}"
        if not self.classifier.is_relevant(text):
            return None

        category = self.classifier.detect_category(text)
        if callable(engagement_score):
            engagement_score = engagement_score(category)

        return FeedItemSchema(
            id=id,
            type=self.item_type,
            title=title,
            content=content,
            author=author,
            source=source,
            url=url,
            image_url=image_url,
            engagement_score=float(engagement_score or 0),
            likes=max(0, likes or 0),
            reposts=max(0, reposts or 0),
            replies=max(0, replies or 0),
            views=max(0, views or 0),
            category=category,
            sentiment=self.classifier.analyze_sentiment(text),
            tags=self.classifier.extract_tags(text),
            published_at=published_at,
            created_at=now,
        )

    def __repr__(self):
        return f"<{type(self).__name__} {self.name}>"
