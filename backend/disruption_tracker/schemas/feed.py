from pydantic import BaseModel, Field
from typing import Optional, Literal, Dict, List
from datetime import datetime

Category = Literal[
    'Layoffs',
    'Funding',
    'Product Launch',
    'Regulation',
    'Breakthrough',
    'Acquisition',
    'General',
]
Sentiment = Literal['positive', 'negative', 'neutral']
FeedItemType = Literal['social', 'news']

GENERAL: Category = 'General'


class FeedItemSchema(BaseModel):
    """A normalized unit of content produced by a source adapter"""
    id: str
    type: FeedItemType
    title: str
    content: str = ''
    author: str = ''
    source: str = ''
    url: str
    image_url: Optional[str] = None
    engagement_score: float = 0.0
    likes: int = Field(0, ge=0)
    reposts: int = Field(0, ge=0)
    replies: int = Field(0, ge=0)
    views: int = Field(0, ge=0)
    category: Category = GENERAL
    sentiment: Sentiment = 'neutral'
    tags: List[str] = Field(default_factory=list, max_length=8)
    published_at: datetime
    created_at: datetime

    class Config:
        from_attributes = True


class TrendingCompanySchema(BaseModel):
    name: str
    count: int
    sentiment: Sentiment

    class Config:
        from_attributes = True


class FetchLogSchema(BaseModel):
    id: int
    type: str
    status: Literal['success', 'error', 'partial']
    count: int
    error: Optional[str] = None
    duration_ms: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class KeywordCount(BaseModel):
    keyword: str
    count: int


class SourceCount(BaseModel):
    source: str
    count: int


class FeedAggregates(BaseModel):
    """Counts over live (non-expired) feed items"""
    counts_by_type: Dict[str, int] = Field(default_factory=dict)
    counts_by_category: Dict[str, int] = Field(default_factory=dict)
    counts_by_sentiment: Dict[str, int] = Field(default_factory=dict)
    top_sources: List[SourceCount] = Field(default_factory=list)


class SidebarStats(BaseModel):
    trending_companies: List[TrendingCompanySchema]
    total_layoffs: Optional[int] = None
    total_funding: Optional[str] = None
    last_refreshed: datetime
    total_items: int


class AdminStats(BaseModel):
    total_posts: int
    total_news: int
    last_fetch: Optional[datetime] = None
    fetch_logs: List[FetchLogSchema]
    category_breakdown: Dict[str, int]
    sentiment_breakdown: Dict[str, int]
    top_sources: List[SourceCount]


class RefreshResults(BaseModel):
    """Outcome of one orchestrator run"""
    social: int = 0
    news: int = 0
    funding: int = 0
    errors: List[str] = Field(default_factory=list)
    duration_ms: int = 0
