from disruption_tracker.schemas.common import APIResponse, ErrorResponse
from disruption_tracker.schemas.feed import (
    Category,
    Sentiment,
    FeedItemType,
    GENERAL,
    FeedItemSchema,
    TrendingCompanySchema,
    FetchLogSchema,
    KeywordCount,
    SourceCount,
    FeedAggregates,
    SidebarStats,
    AdminStats,
    RefreshResults,
)
from disruption_tracker.schemas.funding import (
    FundingRoundSchema,
    FundingFilters,
    FundingFetchResult,
    FundingListResponse,
)

__all__ = [
    # Common
    "APIResponse",
    "ErrorResponse",
    # Feed
    "Category",
    "Sentiment",
    "FeedItemType",
    "GENERAL",
    "FeedItemSchema",
    "TrendingCompanySchema",
    "FetchLogSchema",
    "KeywordCount",
    "SourceCount",
    "FeedAggregates",
    "SidebarStats",
    "AdminStats",
    "RefreshResults",
    # Funding
    "FundingRoundSchema",
    "FundingFilters",
    "FundingFetchResult",
    "FundingListResponse",
]
