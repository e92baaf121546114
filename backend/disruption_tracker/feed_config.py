"""
Source catalogs: subreddits, news RSS feeds and funding RSS feeds.
"""

from typing import List, NamedTuple


class FeedSource(NamedTuple):
    url: str
    source: str
    priority: int


SUBREDDITS: List[str] = [
    'MachineLearning',
    'artificial',
    'singularity',
    'LocalLLaMA',
    'OpenAI',
    'ChatGPT',
    'AINews',
    'Futurology',
    'technology',
]

_GOOGLE_NEWS = 'https://news.google.com/rss/search?q={query}&hl=en-US&gl=US&ceid=US:en'

RSS_FEEDS: List[FeedSource] = [
    # Tech / AI publications
    FeedSource('https://techcrunch.com/category/artificial-intelligence/feed/', 'TechCrunch', 90),
    FeedSource('https://www.theverge.com/ai-artificial-intelligence/rss/index.xml', 'The Verge', 85),
    FeedSource('https://www.wired.com/feed/tag/ai/latest/rss', 'Wired', 85),
    FeedSource('https://feeds.arstechnica.com/arstechnica/technology-lab', 'Ars Technica', 80),
    FeedSource('https://www.technologyreview.com/feed/', 'MIT Tech Review', 90),
    FeedSource('https://venturebeat.com/category/ai/feed/', 'VentureBeat', 80),
    # Google News keyword searches
    FeedSource(_GOOGLE_NEWS.format(query='artificial+intelligence+layoffs'), 'Google News', 70),
    FeedSource(_GOOGLE_NEWS.format(query='AI+startup+funding'), 'Google News', 70),
    FeedSource(_GOOGLE_NEWS.format(query='OpenAI+OR+Anthropic+OR+%22Google+AI%22'), 'Google News', 75),
    FeedSource(_GOOGLE_NEWS.format(query='AI+regulation+OR+%22AI+act%22'), 'Google News', 70),
    FeedSource(_GOOGLE_NEWS.format(query='LLM+OR+AGI+OR+%22large+language+model%22'), 'Google News', 70),
]

FUNDING_RSS_FEEDS: List[str] = [
    _GOOGLE_NEWS.format(query='AI+startup+funding+million+billion'),
    _GOOGLE_NEWS.format(query='%22raises%22+%22AI%22+%22funding%22+%22million%22'),
    'https://techcrunch.com/category/fundings-exits/feed/',
    'https://venturebeat.com/category/ai/feed/',
]

REDDIT_HOT_URL = 'https://www.reddit.com/r/{sub}/hot.json?limit=100'
HN_TOP_STORIES_URL = 'https://hacker-news.firebaseio.com/v0/topstories.json'
HN_ITEM_URL = 'https://hacker-news.firebaseio.com/v0/item/{id}.json'
HN_DISCUSSION_URL = 'https://news.ycombinator.com/item?id={id}'
X_RECENT_SEARCH_URL = 'https://api.twitter.com/2/tweets/search/recent'

RSS_ACCEPT = 'application/rss+xml, application/atom+xml, text/xml, */*'
