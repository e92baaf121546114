"""
Persistence for feed items, trending companies, fetch logs and funding rounds.

All writes are upserts keyed on stable ids, so concurrent or repeated
refreshes converge on the same rows. Timestamps are naive UTC.
"""

from collections import Counter
from contextlib import contextmanager
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from loguru import logger
from sqlalchemy import and_, extract, func, or_, text
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import sessionmaker

from disruption_tracker.config import settings
from disruption_tracker.models import FeedItem, TrendingCompany, FetchLog, FundingRound
from disruption_tracker.schemas.feed import (
    FeedItemSchema,
    TrendingCompanySchema,
    FetchLogSchema,
    FeedAggregates,
    KeywordCount,
    SourceCount,
    GENERAL,
)
from disruption_tracker.schemas.funding import FundingRoundSchema, FundingFilters
from disruption_tracker.utils.timeutils import utcnow, to_naive_utc

_INSERTS = {
    'sqlite': sqlite_insert,
    'postgresql': pg_insert,
}


class FeedStore:
    """Repository over the tracker tables"""

    def __init__(self, engine, feed_ttl: timedelta = None):
        self.engine = engine
        self.feed_ttl = feed_ttl or timedelta(hours=settings.FEED_TTL_HOURS)
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

        dialect = engine.dialect.name
        if dialect not in _INSERTS:
            raise RuntimeError(f"Unsupported database dialect for upserts: {dialect}")
        self._insert = _INSERTS[dialect]

    @contextmanager
    def session(self):
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def ping(self) -> bool:
        with self.session() as db:
            db.execute(text("SELECT 1"))
        return True

    # ------------------------------------------------------------------
    # Feed items
    # ------------------------------------------------------------------

    def upsert_feed_item(self, item: FeedItemSchema) -> None:
        """
        Insert an item or refresh its counters

        Content fields are kept from the first insert; engagement, counters
        and expiry are updated on conflict.
        """
        created_at = to_naive_utc(item.created_at)
        values = item.model_dump()
        values.update(
            tags=list(item.tags),
            published_at=to_naive_utc(item.published_at),
            created_at=created_at,
            expires_at=created_at + self.feed_ttl,
        )

        stmt = self._insert(FeedItem).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[FeedItem.id],
            set_={
                'engagement_score': stmt.excluded.engagement_score,
                'likes': stmt.excluded.likes,
                'reposts': stmt.excluded.reposts,
                'replies': stmt.excluded.replies,
                'views': stmt.excluded.views,
                'expires_at': stmt.excluded.expires_at,
            },
        )
        with self.session() as db:
            db.execute(stmt)

    def query_feed_items(
        self,
        type_filter: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
        now: Optional[datetime] = None,
    ) -> List[FeedItemSchema]:
        """Live items, highest engagement first"""
        now = now or utcnow()
        with self.session() as db:
            query = db.query(FeedItem).filter(FeedItem.expires_at > now)
            if type_filter:
                query = query.filter(FeedItem.type == type_filter)
            rows = (
                query.order_by(FeedItem.engagement_score.desc(), FeedItem.published_at.desc())
                .offset(offset)
                .limit(limit)
                .all()
            )
            return [FeedItemSchema.model_validate(row) for row in rows]

    def count_live_items(self, type_filter: Optional[str] = None, now: Optional[datetime] = None) -> int:
        now = now or utcnow()
        with self.session() as db:
            query = db.query(func.count(FeedItem.id)).filter(FeedItem.expires_at > now)
            if type_filter:
                query = query.filter(FeedItem.type == type_filter)
            return query.scalar() or 0

    def get_top_item(self, now: Optional[datetime] = None) -> Optional[FeedItemSchema]:
        """Highest-scoring live item outside the General category"""
        now = now or utcnow()
        with self.session() as db:
            row = (
                db.query(FeedItem)
                .filter(FeedItem.expires_at > now, FeedItem.category != GENERAL)
                .order_by(FeedItem.engagement_score.desc(), FeedItem.published_at.desc())
                .first()
            )
            return FeedItemSchema.model_validate(row) if row else None

    # ------------------------------------------------------------------
    # Trending companies
    # ------------------------------------------------------------------

    def upsert_trending_company(self, name: str, sentiment: str, now: Optional[datetime] = None) -> None:
        """Increment a company's mention count in a single statement"""
        now = now or utcnow()
        stmt = self._insert(TrendingCompany).values(
            name=name,
            count=1,
            sentiment=sentiment,
            last_seen=now,
            expires_at=now + self.feed_ttl,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[TrendingCompany.name],
            set_={
                'count': TrendingCompany.count + 1,
                'sentiment': stmt.excluded.sentiment,
                'last_seen': stmt.excluded.last_seen,
                'expires_at': stmt.excluded.expires_at,
            },
        )
        with self.session() as db:
            db.execute(stmt)

    def query_trending_companies(self, limit: int = 10, now: Optional[datetime] = None) -> List[TrendingCompanySchema]:
        now = now or utcnow()
        with self.session() as db:
            rows = (
                db.query(TrendingCompany)
                .filter(TrendingCompany.expires_at > now)
                .order_by(TrendingCompany.count.desc(), TrendingCompany.last_seen.desc())
                .limit(limit)
                .all()
            )
            return [TrendingCompanySchema.model_validate(row) for row in rows]

    # ------------------------------------------------------------------
    # Fetch logs
    # ------------------------------------------------------------------

    def append_fetch_log(
        self,
        family: str,
        status: str,
        count: int = 0,
        error: Optional[str] = None,
        duration_ms: Optional[int] = None,
    ) -> None:
        with self.session() as db:
            db.add(FetchLog(
                type=family,
                status=status,
                count=count,
                error=error,
                duration_ms=duration_ms,
                created_at=utcnow(),
            ))

    def query_recent_fetch_logs(self, limit: int = 20) -> List[FetchLogSchema]:
        with self.session() as db:
            rows = (
                db.query(FetchLog)
                .order_by(FetchLog.created_at.desc(), FetchLog.id.desc())
                .limit(limit)
                .all()
            )
            return [FetchLogSchema.model_validate(row) for row in rows]

    def query_last_successful_fetch_time(self) -> Optional[datetime]:
        """Latest run that stored data: a success, or a partial run with a non-zero count"""
        with self.session() as db:
            return (
                db.query(func.max(FetchLog.created_at))
                .filter(or_(
                    FetchLog.status == 'success',
                    and_(FetchLog.status == 'partial', FetchLog.count > 0),
                ))
                .scalar()
            )

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def query_aggregates(self, now: Optional[datetime] = None) -> FeedAggregates:
        """Counts by type, category and sentiment plus the top 10 sources"""
        now = now or utcnow()
        live = FeedItem.expires_at > now

        with self.session() as db:
            def grouped(column):
                rows = db.query(column, func.count(FeedItem.id)).filter(live).group_by(column).all()
                return {key: count for key, count in rows}

            source_count = func.count(FeedItem.id).label('n')
            sources = (
                db.query(FeedItem.source, source_count)
                .filter(live)
                .group_by(FeedItem.source)
                .order_by(source_count.desc(), FeedItem.source)
                .limit(10)
                .all()
            )

            return FeedAggregates(
                counts_by_type=grouped(FeedItem.type),
                counts_by_category=grouped(FeedItem.category),
                counts_by_sentiment=grouped(FeedItem.sentiment),
                top_sources=[SourceCount(source=source, count=count) for source, count in sources],
            )

    def query_keyword_counts(self, limit: int = 30, now: Optional[datetime] = None) -> List[KeywordCount]:
        """Tag frequencies over live items, most common first"""
        now = now or utcnow()
        counter = Counter()
        with self.session() as db:
            for (tags,) in db.query(FeedItem.tags).filter(FeedItem.expires_at > now):
                counter.update(tags or [])

        return [KeywordCount(keyword=keyword, count=count) for keyword, count in counter.most_common(limit)]

    def sweep_expired(self, now: Optional[datetime] = None) -> Dict[str, int]:
        """Delete expired items and companies"""
        now = now or utcnow()
        with self.session() as db:
            items = db.query(FeedItem).filter(FeedItem.expires_at <= now).delete(synchronize_session=False)
            companies = (
                db.query(TrendingCompany)
                .filter(TrendingCompany.expires_at <= now)
                .delete(synchronize_session=False)
            )

        if items or companies:
            logger.info(f"Swept {items} expired items and {companies} expired companies")
        return {'items': items, 'companies': companies}

    # ------------------------------------------------------------------
    # Funding rounds
    # ------------------------------------------------------------------

    def upsert_funding_round(self, funding_round: FundingRoundSchema) -> None:
        values = funding_round.model_dump()
        values['investors'] = list(funding_round.investors)
        values['created_at'] = to_naive_utc(funding_round.created_at) or utcnow()

        stmt = self._insert(FundingRound).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[FundingRound.id],
            set_={
                'funding_amount_m': stmt.excluded.funding_amount_m,
                'funding_display': stmt.excluded.funding_display,
                'investors': stmt.excluded.investors,
                'description': stmt.excluded.description,
                'valuation_display': stmt.excluded.valuation_display,
            },
        )
        with self.session() as db:
            db.execute(stmt)

    @staticmethod
    def _filter_funding(query, filters: FundingFilters):
        if filters.search:
            query = query.filter(func.lower(FundingRound.company_name).contains(filters.search.lower()))
        if filters.industry:
            query = query.filter(FundingRound.industry == filters.industry)
        if filters.stage:
            query = query.filter(FundingRound.round_type == filters.stage)
        if filters.location:
            query = query.filter(func.lower(FundingRound.location).contains(filters.location.lower()))
        if filters.year and filters.year.isdigit():
            query = query.filter(extract('year', FundingRound.announced_date) == int(filters.year))
        return query

    def query_funding_rounds(self, filters: FundingFilters = None) -> List[FundingRoundSchema]:
        filters = filters or FundingFilters()
        with self.session() as db:
            query = self._filter_funding(db.query(FundingRound), filters)

            if filters.sort == 'amount':
                column = FundingRound.funding_amount_m
            elif filters.sort == 'company':
                column = FundingRound.company_name
            else:
                column = FundingRound.announced_date
            primary = column.asc() if filters.order == 'asc' else column.desc()
            if filters.sort == 'amount':
                primary = primary.nullslast()

            rows = (
                query.order_by(primary, FundingRound.announced_date.desc(), FundingRound.id)
                .offset(filters.offset)
                .limit(filters.limit)
                .all()
            )
            return [FundingRoundSchema.model_validate(row) for row in rows]

    def count_funding_rounds(self, filters: FundingFilters = None) -> int:
        filters = filters or FundingFilters()
        with self.session() as db:
            query = self._filter_funding(db.query(func.count(FundingRound.id)), filters)
            return query.scalar() or 0

    def query_funding_stats(self, months: int = 24, today: Optional[date] = None) -> dict:
        """
        Totals and breakdowns over all funding rounds

        Returns:
            Dictionary with totals, by_industry (top 10 by amount), by_stage
            and by_month (last `months` months, oldest first)
        """
        today = today or utcnow().date()
        amount = FundingRound.funding_amount_m

        with self.session() as db:
            total_rounds, total_companies, total_m, avg_m, max_m = db.query(
                func.count(FundingRound.id),
                func.count(func.distinct(FundingRound.company_name)),
                func.sum(amount),
                func.avg(amount),
                func.max(amount),
            ).one()

            largest = db.query(FundingRound).order_by(amount.desc().nullslast()).first()
            latest = db.query(FundingRound).order_by(FundingRound.announced_date.desc()).first()

            industry_total = func.sum(amount).label('total')
            by_industry = (
                db.query(FundingRound.industry, func.count(FundingRound.id), industry_total)
                .filter(amount.isnot(None))
                .group_by(FundingRound.industry)
                .order_by(industry_total.desc())
                .limit(10)
                .all()
            )

            stage_total = func.sum(amount).label('total')
            by_stage = (
                db.query(FundingRound.round_type, func.count(FundingRound.id), stage_total)
                .group_by(FundingRound.round_type)
                .order_by(stage_total.desc().nullslast())
                .all()
            )

            year, month = today.year, today.month - (months - 1)
            while month <= 0:
                month += 12
                year -= 1
            cutoff = date(year, month, 1)
            recent = (
                db.query(FundingRound.announced_date, amount)
                .filter(FundingRound.announced_date >= cutoff)
                .all()
            )

            monthly: Dict[str, Dict[str, float]] = {}
            for announced, amount_m in recent:
                bucket = monthly.setdefault(announced.strftime('%Y-%m'), {'count': 0, 'total_m': 0.0})
                bucket['count'] += 1
                bucket['total_m'] += amount_m or 0

            return {
                'totals': {
                    'total_rounds': total_rounds or 0,
                    'total_companies': total_companies or 0,
                    'total_amount_m': float(total_m or 0),
                    'avg_amount_m': round(float(avg_m), 1) if avg_m is not None else None,
                    'max_amount_m': float(max_m) if max_m is not None else None,
                    'largest_round': FundingRoundSchema.model_validate(largest) if largest else None,
                    'latest_round': FundingRoundSchema.model_validate(latest) if latest else None,
                },
                'by_industry': [
                    {'industry': industry, 'count': count, 'total_m': float(total or 0)}
                    for industry, count, total in by_industry
                ],
                'by_stage': [
                    {'stage': stage, 'count': count, 'total_m': float(total or 0)}
                    for stage, count, total in by_stage
                ],
                'by_month': [
                    {'month': key, **monthly[key]} for key in sorted(monthly)
                ],
            }

    def is_seeded(self) -> bool:
        with self.session() as db:
            return db.query(FundingRound.id).filter(FundingRound.is_seed_data.is_(True)).first() is not None
