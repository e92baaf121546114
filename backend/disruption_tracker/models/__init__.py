from disruption_tracker.models.feed_item import FeedItem
from disruption_tracker.models.trending_company import TrendingCompany
from disruption_tracker.models.fetch_log import FetchLog
from disruption_tracker.models.funding_round import FundingRound

__all__ = [
    "FeedItem",
    "TrendingCompany",
    "FetchLog",
    "FundingRound",
]
