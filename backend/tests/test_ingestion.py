"""
Tests for the ingestion orchestrator and the scheduled job wrappers.
"""

import time
from datetime import timedelta

import pytest

from disruption_tracker.feed_config import REDDIT_HOT_URL
from disruption_tracker.scheduler.jobs import refresh_feeds_job, sweep_expired_job
from disruption_tracker.scheduler.scheduler_service import (
    SchedulerService,
    JOB_REFRESH_FEEDS,
    JOB_REFRESH_FUNDING,
    JOB_SWEEP_EXPIRED,
)
from disruption_tracker.services.cache import CacheKeys, CacheTTL
from disruption_tracker.schemas.funding import FundingFetchResult
from disruption_tracker.services.funding_fetcher import FundingExtractor
from disruption_tracker.services.http_client import UpstreamError
from disruption_tracker.services.ingestion import IngestionOrchestrator
from disruption_tracker.services.store import FeedStore
from disruption_tracker.services.sources import SourceFamily, SubredditAdapter, RSSFeedAdapter
from disruption_tracker.utils.timeutils import utcnow

from conftest import FakeHttpClient, rss_document, rss_item

NEWS_URL = 'https://news.example.com/feed'
OTHER_NEWS_URL = 'https://other.example.com/feed'


def reddit_listing(*posts):
    return {'data': {'children': [{'data': post} for post in posts]}}


def anthropic_post():
    return {
        'id': 'abc',
        'title': "Anthropic raises $50M Series B",
        'selftext': '',
        'permalink': '/r/OpenAI/comments/abc/',
        'author': 'alice',
        'subreddit': 'OpenAI',
        'score': 100,
        'num_comments': 20,
        'upvote_ratio': 0.9,
        'created_utc': time.time() - 3600,
        'thumbnail': '',
        'stickied': False,
    }


def anthropic_news():
    return rss_document(rss_item(
        "Anthropic raises $50M", "https://news.example.com/anthropic",
        "Anthropic raises $50M in a Series B round led by investors",
    ))


@pytest.fixture
def build_orchestrator(store, cache, classifier):
    """Orchestrator over one subreddit and the given RSS feeds, backed by FakeHttpClient"""
    def _build(responses, news_urls=(NEWS_URL,)):
        families = [
            SourceFamily(
                name='social', label='Social',
                adapters=[SubredditAdapter('OpenAI', classifier)],
            ),
            SourceFamily(
                name='news', label='News',
                adapters=[RSSFeedAdapter(url, 'TechCrunch', 90, classifier) for url in news_urls],
            ),
        ]
        return IngestionOrchestrator(
            store,
            cache,
            families,
            classifier,
            http_factory=lambda: FakeHttpClient(responses),
            funding_extractor=FundingExtractor(feeds=[]),
        )
    return _build


class TestRefresh:

    @pytest.mark.asyncio
    async def test_end_to_end(self, store, build_orchestrator):
        orchestrator = build_orchestrator({
            REDDIT_HOT_URL.format(sub='OpenAI'): reddit_listing(anthropic_post()),
            NEWS_URL: anthropic_news(),
        })

        results = await orchestrator.refresh()

        assert results.social == 1
        assert results.news == 1
        assert results.errors == []

        items = store.query_feed_items()
        assert [item.engagement_score for item in items] == [130.0, 110.0]
        social, news = items
        assert social.id == 'rd_abc'
        assert social.views == 111
        assert news.type == 'news'
        assert {item.category for item in items} == {'Funding'}
        assert {item.sentiment for item in items} == {'positive'}

        companies = store.query_trending_companies()
        assert [(c.name, c.count) for c in companies] == [('Anthropic', 2)]

        statuses = {log.type: log.status for log in store.query_recent_fetch_logs()}
        assert statuses == {'social': 'success', 'news': 'success'}

    @pytest.mark.asyncio
    async def test_rerun_does_not_duplicate(self, store, build_orchestrator):
        orchestrator = build_orchestrator({
            REDDIT_HOT_URL.format(sub='OpenAI'): reddit_listing(anthropic_post()),
            NEWS_URL: anthropic_news(),
        })

        await orchestrator.refresh()
        await orchestrator.refresh()

        assert store.count_live_items() == 2

    @pytest.mark.asyncio
    async def test_family_error_when_every_adapter_fails(self, store, build_orchestrator):
        orchestrator = build_orchestrator({
            REDDIT_HOT_URL.format(sub='OpenAI'): reddit_listing(anthropic_post()),
            NEWS_URL: UpstreamError("HTTP 500"),
        })

        results = await orchestrator.refresh()

        assert results.social == 1
        assert results.news == 0
        assert len(results.errors) == 1
        assert results.errors[0].startswith("News: ")
        assert "HTTP 500" in results.errors[0]

        logs = {log.type: log for log in store.query_recent_fetch_logs()}
        assert logs['news'].status == 'error'
        assert logs['social'].status == 'success'

    @pytest.mark.asyncio
    async def test_partial_when_some_adapters_fail(self, store, build_orchestrator):
        orchestrator = build_orchestrator(
            {
                REDDIT_HOT_URL.format(sub='OpenAI'): reddit_listing(),
                NEWS_URL: anthropic_news(),
                OTHER_NEWS_URL: UpstreamError("timeout"),
            },
            news_urls=(NEWS_URL, OTHER_NEWS_URL),
        )

        results = await orchestrator.refresh()

        assert results.news == 1
        assert results.errors == []
        news_log = next(log for log in store.query_recent_fetch_logs() if log.type == 'news')
        assert news_log.status == 'partial'
        assert "timeout" in news_log.error

    @pytest.mark.asyncio
    async def test_cache_is_invalidated(self, cache, build_orchestrator):
        cache.set(CacheKeys.FEED_ALL, ['stale'], CacheTTL.FEED)
        cache.set(CacheKeys.TRENDING, ['stale'], CacheTTL.TRENDING)
        cache.set('unrelated', 'kept', CacheTTL.FEED)

        await build_orchestrator({}).refresh()

        assert cache.get(CacheKeys.FEED_ALL) is None
        assert cache.get(CacheKeys.TRENDING) is None
        assert cache.get('unrelated') == 'kept'

    @pytest.mark.asyncio
    async def test_expired_rows_swept_first(self, store, make_item, build_orchestrator):
        store.upsert_feed_item(make_item('rd_old', created_at=utcnow() - timedelta(hours=30)))

        await build_orchestrator({}).refresh()

        swept_again = store.sweep_expired()
        assert swept_again == {'items': 0, 'companies': 0}

    @pytest.mark.asyncio
    async def test_ranking_caps_family(self, store, classifier):
        posts = [dict(anthropic_post(), id=f'p{n}', title=f"OpenAI post number {n}", score=n) for n in range(5)]
        family = SourceFamily(
            name='social', label='Social',
            adapters=[SubredditAdapter('OpenAI', classifier)],
            max_items=2,
        )
        http = FakeHttpClient({REDDIT_HOT_URL.format(sub='OpenAI'): reddit_listing(*posts)})
        orchestrator = IngestionOrchestrator(store, None, [family], classifier)

        items, failures = await orchestrator.collect(family, http)

        assert failures == []
        assert [item.id for item in items] == ['rd_p4', 'rd_p3']

    @pytest.mark.asyncio
    async def test_partial_runs_update_last_refresh(self, store, cache, classifier):
        families = [
            SourceFamily(
                name='social', label='Social',
                adapters=[SubredditAdapter('OpenAI', classifier), SubredditAdapter('Missing', classifier)],
            ),
            SourceFamily(
                name='news', label='News',
                adapters=[
                    RSSFeedAdapter(NEWS_URL, 'TechCrunch', 90, classifier),
                    RSSFeedAdapter(OTHER_NEWS_URL, 'Wired', 85, classifier),
                ],
            ),
        ]
        responses = {
            REDDIT_HOT_URL.format(sub='OpenAI'): reddit_listing(anthropic_post()),
            NEWS_URL: anthropic_news(),
        }
        orchestrator = IngestionOrchestrator(
            store, cache, families, classifier,
            http_factory=lambda: FakeHttpClient(responses),
            funding_extractor=FundingExtractor(feeds=[]),
        )

        results = await orchestrator.refresh()

        assert (results.social, results.news, results.errors) == (1, 1, [])
        assert {log.status for log in store.query_recent_fetch_logs()} == {'partial'}
        assert store.query_last_successful_fetch_time() is not None

    def test_failed_mention_keeps_item_and_other_mentions(self, store, classifier, make_item):
        class FlakyTrendingStore(FeedStore):
            def upsert_trending_company(self, name, sentiment, now=None):
                if name == 'Anthropic':
                    raise RuntimeError("database is locked")
                return super().upsert_trending_company(name, sentiment, now)

        flaky = FlakyTrendingStore(store.engine)
        orchestrator = IngestionOrchestrator(flaky, None, [], classifier)
        item = make_item('rd_pair', title="Anthropic and OpenAI sign a joint safety pact")

        assert orchestrator.persist([item]) == 1
        assert flaky.count_live_items() == 1
        assert [c.name for c in flaky.query_trending_companies()] == ['OpenAI']


class TestFundingRefresh:

    @pytest.mark.asyncio
    async def test_seeds_then_fetches(self, store, build_orchestrator):
        orchestrator = build_orchestrator({})

        seeded, result = await orchestrator.refresh_funding()

        assert seeded == 38
        assert result.inserted == 0
        assert store.count_funding_rounds() == 38
        assert store.query_recent_fetch_logs()[0].type == 'funding'

        seeded_again, _ = await orchestrator.refresh_funding()
        assert seeded_again == 0

    @pytest.mark.asyncio
    async def test_store_errors_recorded_on_partial_log(self, store, cache, classifier):
        class LossyExtractor:
            async def fetch_and_store(self, http, store):
                return FundingFetchResult(fetched=5, inserted=3, errors=2)

        orchestrator = IngestionOrchestrator(
            store, cache, [], classifier,
            http_factory=lambda: FakeHttpClient({}),
            funding_extractor=LossyExtractor(),
        )

        await orchestrator.refresh_funding()

        log = store.query_recent_fetch_logs()[0]
        assert (log.type, log.status, log.count) == ('funding', 'partial', 3)
        assert log.error == "2 store errors"

    @pytest.mark.asyncio
    async def test_refresh_with_funding(self, store, build_orchestrator):
        results = await build_orchestrator({}).refresh(include_funding=True)

        assert results.funding == 0
        assert store.is_seeded()


class TestJobs:

    @pytest.mark.asyncio
    async def test_refresh_job_swallows_errors(self):
        class ExplodingOrchestrator:
            async def refresh(self):
                raise RuntimeError("boom")

        await refresh_feeds_job(ExplodingOrchestrator())

    @pytest.mark.asyncio
    async def test_sweep_job_clears_cache(self, store, cache, make_item):
        store.upsert_feed_item(make_item('rd_old', created_at=utcnow() - timedelta(hours=30)))
        cache.set(CacheKeys.FEED_ALL, ['stale'], CacheTTL.FEED)

        await sweep_expired_job(store, cache)

        assert cache.size() == 0
        assert store.count_live_items() == 0


class TestSchedulerService:

    @pytest.mark.asyncio
    async def test_registers_system_jobs(self, store, cache):
        service = SchedulerService(orchestrator=None, store=store, cache=cache)
        service.initialize()
        service.start()
        try:
            job_ids = {job['id'] for job in service.get_all_jobs()}
            assert job_ids == {JOB_REFRESH_FEEDS, JOB_REFRESH_FUNDING, JOB_SWEEP_EXPIRED}
            assert service.trigger_job_now(JOB_SWEEP_EXPIRED) is True
            assert service.trigger_job_now('missing') is False
        finally:
            service.shutdown()

        assert service.is_running is False

    def test_start_requires_initialize(self, store):
        with pytest.raises(RuntimeError):
            SchedulerService(orchestrator=None, store=store).start()
