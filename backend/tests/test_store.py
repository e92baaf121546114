"""
Tests for FeedStore against an in-memory SQLite database.
"""

from datetime import date, timedelta

import pytest

from disruption_tracker.init_db import init_database
from disruption_tracker.schemas.funding import FundingFilters
from disruption_tracker.services.funding_seed import SEED_ROUNDS, seed_funding_data
from disruption_tracker.services.store import FeedStore
from disruption_tracker.utils.timeutils import utcnow


class TestFeedItems:

    def test_expiry_window(self, store, make_item):
        now = utcnow()
        store.upsert_feed_item(make_item('rd_fresh', created_at=now - timedelta(hours=23)))
        store.upsert_feed_item(make_item('rd_stale', created_at=now - timedelta(hours=25)))

        ids = [item.id for item in store.query_feed_items(now=now)]

        assert ids == ['rd_fresh']
        assert store.count_live_items(now=now) == 1

    def test_conflict_updates_counters_only(self, store, make_item):
        store.upsert_feed_item(make_item('rd_1', title="OpenAI original title", engagement_score=10, likes=1))
        store.upsert_feed_item(make_item('rd_1', title="OpenAI edited title", engagement_score=50, likes=40))

        items = store.query_feed_items()

        assert len(items) == 1
        assert items[0].title == "OpenAI original title"
        assert items[0].engagement_score == 50.0
        assert items[0].likes == 40

    def test_ordering_and_type_filter(self, store, make_item):
        now = utcnow()
        store.upsert_feed_item(make_item('rd_low', engagement_score=5))
        store.upsert_feed_item(make_item('rd_high', engagement_score=100))
        store.upsert_feed_item(make_item('rss_mid', type='news', engagement_score=50))
        store.upsert_feed_item(make_item('rd_tie_old', engagement_score=5, published_at=now - timedelta(hours=5)))

        assert [i.id for i in store.query_feed_items()] == ['rd_high', 'rss_mid', 'rd_low', 'rd_tie_old']
        assert [i.id for i in store.query_feed_items(type_filter='news')] == ['rss_mid']
        assert [i.id for i in store.query_feed_items(limit=2, offset=1)] == ['rss_mid', 'rd_low']

    def test_top_item_skips_general(self, store, make_item):
        store.upsert_feed_item(make_item('rd_general', engagement_score=500))
        store.upsert_feed_item(make_item('rd_funding', engagement_score=40, category='Funding'))

        assert store.get_top_item().id == 'rd_funding'

    def test_top_item_empty(self, store):
        assert store.get_top_item() is None

    def test_tags_round_trip(self, store, make_item):
        store.upsert_feed_item(make_item('rd_1', tags=['OpenAI', 'LLM']))
        assert store.query_feed_items()[0].tags == ['OpenAI', 'LLM']


class TestTrendingCompanies:

    def test_mentions_increment(self, store):
        store.upsert_trending_company('OpenAI', 'neutral')
        store.upsert_trending_company('OpenAI', 'positive')
        store.upsert_trending_company('Anthropic', 'neutral')

        companies = store.query_trending_companies()

        assert [(c.name, c.count) for c in companies] == [('OpenAI', 2), ('Anthropic', 1)]
        assert companies[0].sentiment == 'positive'

    def test_expired_companies_hidden(self, store):
        store.upsert_trending_company('OpenAI', 'neutral', now=utcnow() - timedelta(hours=30))
        assert store.query_trending_companies() == []


class TestFetchLogs:

    def test_recent_first_and_last_success(self, store):
        store.append_fetch_log('social', 'success', count=10, duration_ms=1200)
        store.append_fetch_log('news', 'error', error="News: HTTP 500")

        logs = store.query_recent_fetch_logs()

        assert [log.type for log in logs] == ['news', 'social']
        assert logs[0].error == "News: HTTP 500"
        assert store.query_last_successful_fetch_time() == logs[1].created_at

    def test_no_success_yet(self, store):
        store.append_fetch_log('news', 'error', error="boom")
        assert store.query_last_successful_fetch_time() is None

    def test_partial_run_with_items_counts_as_success(self, store):
        store.append_fetch_log('news', 'partial', count=0, error="Wired: HTTP 404")
        assert store.query_last_successful_fetch_time() is None

        store.append_fetch_log('social', 'partial', count=4, error="r/LocalLLaMA: HTTP 404")

        latest = store.query_recent_fetch_logs()[0]
        assert store.query_last_successful_fetch_time() == latest.created_at


class TestAggregates:

    def test_counts_and_sources(self, store, make_item):
        store.upsert_feed_item(make_item('rd_1', category='Funding', sentiment='positive'))
        store.upsert_feed_item(make_item('rd_2', category='Funding', sentiment='negative'))
        store.upsert_feed_item(make_item('rss_1', type='news', source='TechCrunch'))

        aggregates = store.query_aggregates()

        assert aggregates.counts_by_type == {'social': 2, 'news': 1}
        assert aggregates.counts_by_category == {'Funding': 2, 'General': 1}
        assert aggregates.counts_by_sentiment == {'positive': 1, 'negative': 1, 'neutral': 1}
        assert [(s.source, s.count) for s in aggregates.top_sources] == [('r/OpenAI', 2), ('TechCrunch', 1)]

    def test_keyword_counts(self, store, make_item):
        store.upsert_feed_item(make_item('rd_1', tags=['OpenAI', 'LLM']))
        store.upsert_feed_item(make_item('rd_2', tags=['OpenAI']))

        keywords = store.query_keyword_counts()

        assert [(k.keyword, k.count) for k in keywords] == [('OpenAI', 2), ('LLM', 1)]

    def test_sweep_expired(self, store, make_item):
        now = utcnow()
        store.upsert_feed_item(make_item('rd_old', created_at=now - timedelta(hours=30)))
        store.upsert_feed_item(make_item('rd_new'))
        store.upsert_trending_company('OpenAI', 'neutral', now=now - timedelta(hours=30))

        swept = store.sweep_expired(now=now)

        assert swept == {'items': 1, 'companies': 1}
        assert store.count_live_items() == 1


class TestFundingRounds:

    @pytest.fixture
    def seeded(self, store):
        assert seed_funding_data(store) == len(SEED_ROUNDS)
        return store

    def test_seed_once(self, seeded):
        assert seeded.is_seeded()
        assert seed_funding_data(seeded) == 0
        assert seed_funding_data(seeded, force=True) == len(SEED_ROUNDS)
        assert seeded.count_funding_rounds() == len(SEED_ROUNDS) == 38

    def test_search_is_case_insensitive(self, seeded):
        rounds = seeded.query_funding_rounds(FundingFilters(search='openai'))
        assert {r.company_name for r in rounds} == {'OpenAI'}
        assert len(rounds) == 2

    def test_sort_by_amount(self, seeded):
        rounds = seeded.query_funding_rounds(FundingFilters(sort='amount', order='desc', limit=3))
        assert rounds[0].company_name == 'OpenAI'
        assert rounds[0].funding_amount_m == 110_000
        assert [r.funding_amount_m for r in rounds] == sorted((r.funding_amount_m for r in rounds), reverse=True)

    def test_sort_by_company_ascending(self, seeded):
        rounds = seeded.query_funding_rounds(FundingFilters(sort='company', order='asc'))
        names = [r.company_name for r in rounds]
        assert names == sorted(names)

    def test_filters(self, seeded):
        assert seeded.count_funding_rounds(FundingFilters(year='2026')) == 6
        assert seeded.count_funding_rounds(FundingFilters(location='china')) == 4
        assert seeded.count_funding_rounds(FundingFilters(year='not-a-year')) == 38

        stage = seeded.query_funding_rounds(FundingFilters(stage='Series B'))
        assert stage and all(r.round_type == 'Series B' for r in stage)

    def test_pagination(self, seeded):
        first = seeded.query_funding_rounds(FundingFilters(limit=5))
        second = seeded.query_funding_rounds(FundingFilters(limit=5, offset=5))
        assert len(first) == len(second) == 5
        assert not {r.id for r in first} & {r.id for r in second}

    def test_stats(self, seeded):
        stats = seeded.query_funding_stats(today=date(2026, 3, 1))
        totals = stats['totals']

        assert totals['total_rounds'] == 38
        assert totals['max_amount_m'] == 110_000
        assert totals['largest_round'].company_name == 'OpenAI'
        assert totals['latest_round'].announced_date == date(2026, 2, 1)
        assert totals['total_amount_m'] == sum(row['funding_amount_m'] for row in SEED_ROUNDS)

        assert stats['by_industry'][0]['industry'] == 'AI Platform'
        assert len(stats['by_industry']) <= 10

        months = [bucket['month'] for bucket in stats['by_month']]
        assert months == sorted(months)
        assert months[0] >= '2024-04'
        assert months[-1] == '2026-02'

    def test_empty_stats(self, store):
        stats = store.query_funding_stats()
        assert stats['totals']['total_rounds'] == 0
        assert stats['totals']['largest_round'] is None
        assert stats['by_month'] == []


def test_unsupported_dialect():
    class FakeEngine:
        class dialect:
            name = 'oracle'

    with pytest.raises(RuntimeError):
        FeedStore(FakeEngine())


def test_ping(store):
    assert store.ping() is True


def test_init_database_seeds_once(engine):
    assert init_database(bind=engine) == 38
    assert init_database(bind=engine) == 0
    assert init_database(bind=engine, force_seed=True) == 38
