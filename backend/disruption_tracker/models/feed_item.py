from sqlalchemy import Column, Integer, String, DateTime, Text, Float, JSON, CheckConstraint
from disruption_tracker.database import Base
from disruption_tracker.utils.timeutils import utcnow


class FeedItem(Base):
    __tablename__ = "feed_items"

    id = Column(String, primary_key=True)
    type = Column(String, nullable=False, index=True)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False, default='')
    author = Column(String, nullable=False, default='')
    source = Column(String, nullable=False, default='')
    url = Column(Text, nullable=False)
    image_url = Column(Text, nullable=True)
    engagement_score = Column(Float, nullable=False, default=0, index=True)
    likes = Column(Integer, nullable=False, default=0)
    reposts = Column(Integer, nullable=False, default=0)
    replies = Column(Integer, nullable=False, default=0)
    views = Column(Integer, nullable=False, default=0)
    category = Column(String, nullable=False, default='General', index=True)
    sentiment = Column(String, nullable=False, default='neutral', index=True)
    tags = Column(JSON, nullable=False, default=list)
    published_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    expires_at = Column(DateTime, nullable=False, index=True)

    __table_args__ = (
        CheckConstraint("type IN ('social', 'news')", name='check_item_type'),
        CheckConstraint(
            "category IN ('Layoffs', 'Funding', 'Product Launch', 'Regulation', "
            "'Breakthrough', 'Acquisition', 'General')",
            name='check_item_category'
        ),
        CheckConstraint(
            "sentiment IN ('positive', 'negative', 'neutral')",
            name='check_item_sentiment'
        ),
    )
