from disruption_tracker.services.aggregates import format_funding_total, summarize_disruption
from disruption_tracker.services.cache import CacheKeys, CacheTTL, MemoryCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class TestMemoryCache:

    def test_get_set_and_expiry(self):
        clock = FakeClock()
        cache = MemoryCache(clock=clock)
        cache.set(CacheKeys.TRENDING, {'a': 1}, CacheTTL.TRENDING)

        assert cache.get(CacheKeys.TRENDING) == {'a': 1}
        clock.advance(CacheTTL.TRENDING - 1)
        assert cache.get(CacheKeys.TRENDING) == {'a': 1}
        clock.advance(1)
        assert cache.get(CacheKeys.TRENDING) is None
        assert cache.size() == 0

    def test_missing_key(self):
        assert MemoryCache().get('nothing') is None

    def test_invalidate_prefix(self):
        cache = MemoryCache()
        cache.set(CacheKeys.FEED_ALL, [], CacheTTL.FEED)
        cache.set(CacheKeys.FEED_NEWS, [], CacheTTL.FEED)
        cache.set(CacheKeys.KEYWORDS, [], CacheTTL.KEYWORDS)

        assert cache.invalidate_prefix(CacheKeys.FEED_PREFIX) == 2
        assert cache.get(CacheKeys.FEED_ALL) is None
        assert cache.get(CacheKeys.KEYWORDS) == []

    def test_invalidate_and_clear(self):
        cache = MemoryCache()
        cache.set('a', 1, 60)
        cache.set('b', 2, 60)
        cache.invalidate('a')
        cache.invalidate('never-set')
        assert cache.get('a') is None
        cache.clear()
        assert cache.size() == 0

    def test_feed_keys(self):
        assert CacheKeys.feed(None) == CacheKeys.FEED_ALL
        assert CacheKeys.feed('social') == CacheKeys.FEED_SOCIAL
        assert CacheKeys.feed('news') == CacheKeys.FEED_NEWS


class TestDisruptionSummary:

    def test_format_funding_total(self):
        assert format_funding_total(0) is None
        assert format_funding_total(450) == '$450M'
        assert format_funding_total(1500) == '$1.5B'

    def test_sums_by_category(self, make_item):
        items = [
            make_item('a', title="Big Tech layoffs: 500 employees laid off", category='Layoffs'),
            make_item('b', title="Startup laid off 1,200 staff", category='Layoffs'),
            make_item('c', title="Anthropic raises $1.5B", category='Funding'),
            make_item('d', title="Mistral raised $40 million", category='Funding'),
            make_item('e', title="Layoffs at 300 labs", category='General'),
        ]

        summary = summarize_disruption(items)

        assert summary == {'total_layoffs': 1700, 'total_funding': '$1.5B'}

    def test_nothing_extracted(self, make_item):
        summary = summarize_disruption([make_item('a', title="OpenAI ships an update")])
        assert summary == {'total_layoffs': None, 'total_funding': None}
