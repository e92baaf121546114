"""
Ingestion orchestrator.

One refresh run: sweep expired rows, pull every source family, dedupe and
rank, persist items and company mentions, log a FetchLog per family and
drop cached reads. Failures stay inside the adapter, item or family where
they happen; a run never raises because an upstream is down.
"""

import asyncio
import time
from typing import Callable, List, Optional, Tuple

from loguru import logger

from disruption_tracker.nlp import TextClassifier
from disruption_tracker.schemas.feed import FeedItemSchema, RefreshResults
from disruption_tracker.schemas.funding import FundingFetchResult
from disruption_tracker.services.cache import MemoryCache, CacheKeys
from disruption_tracker.services.funding_fetcher import FundingExtractor
from disruption_tracker.services.funding_seed import seed_funding_data
from disruption_tracker.services.http_client import HttpClient
from disruption_tracker.services.sources import SourceFamily
from disruption_tracker.services.store import FeedStore
from disruption_tracker.utils.dedup import deduplicate, rank_items

MAX_ERROR_SUMMARY = 3


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


class IngestionOrchestrator:
    """Runs refreshes of the feed and funding data"""

    def __init__(
        self,
        store: FeedStore,
        cache: MemoryCache,
        families: List[SourceFamily],
        classifier: TextClassifier,
        http_factory: Callable[[], HttpClient] = HttpClient,
        funding_extractor: Optional[FundingExtractor] = None,
    ):
        self.store = store
        self.cache = cache
        self.families = families
        self.classifier = classifier
        self.http_factory = http_factory
        self.funding_extractor = funding_extractor or FundingExtractor()

    async def refresh(self, include_funding: bool = False) -> RefreshResults:
        """
        Refresh every source family

        Args:
            include_funding: Also run the funding extractor in this run

        Returns:
            RefreshResults with per-family insert counts and family errors
        """
        started = time.monotonic()
        results = RefreshResults()
        logger.info(f"[Refresh] Starting run over {len(self.families)} families")

        try:
            self.store.sweep_expired()
        except Exception as e:
            logger.error(f"[Refresh] Cleanup error: {e}")

        async with self.http_factory() as http:
            for family in self.families:
                inserted = await self._refresh_family(family, http, results)
                if family.name in ('social', 'news'):
                    setattr(results, family.name, inserted)

            if include_funding:
                _, fetch_result = await self._refresh_funding(http)
                results.funding = fetch_result.inserted

        self.invalidate_cache()

        results.duration_ms = _elapsed_ms(started)
        logger.info(
            f"[Refresh] Done in {results.duration_ms}ms: social={results.social} "
            f"news={results.news} funding={results.funding} errors={len(results.errors)}"
        )
        return results

    async def _refresh_family(self, family: SourceFamily, http: HttpClient, results: RefreshResults) -> int:
        started = time.monotonic()
        try:
            items, failures = await self.collect(family, http)

            if family.adapters and len(failures) == len(family.adapters):
                message = '; '.join(failures[:MAX_ERROR_SUMMARY])
                results.errors.append(f"{family.label}: {message}")
                self._log_fetch(family.name, 'error', 0, message, _elapsed_ms(started))
                return 0

            inserted = self.persist(items)
            status = 'partial' if failures else 'success'
            error = '; '.join(failures[:MAX_ERROR_SUMMARY]) if failures else None
            self._log_fetch(family.name, status, inserted, error, _elapsed_ms(started))
            logger.info(f"[{family.label}] {inserted}/{len(items)} items stored ({status})")
            return inserted

        except Exception as e:
            logger.exception(f"[{family.label}] Refresh failed: {e}")
            results.errors.append(f"{family.label}: {e}")
            self._log_fetch(family.name, 'error', 0, str(e), _elapsed_ms(started))
            return 0

    async def collect(self, family: SourceFamily, http: HttpClient) -> Tuple[List[FeedItemSchema], List[str]]:
        """
        Run a family's adapters one after another

        Returns:
            (deduplicated items ranked and capped, adapter failure messages)
        """
        collected: List[FeedItemSchema] = []
        failures: List[str] = []

        for index, adapter in enumerate(family.adapters):
            try:
                collected.extend(await adapter.fetch(http))
            except Exception as e:
                logger.warning(f"[{family.label}] {adapter.name} failed: {e}")
                failures.append(f"{adapter.name}: {e}")

            if family.delay and index < len(family.adapters) - 1:
                await asyncio.sleep(family.delay)

        unique = deduplicate(collected)
        return rank_items(unique, family.max_items), failures

    def persist(self, items: List[FeedItemSchema]) -> int:
        """Upsert items and their company mentions; returns the stored count"""
        stored = 0
        for item in items:
            try:
                self.store.upsert_feed_item(item)
            except Exception as e:
                logger.error(f"[Refresh] Failed to store {item.id}: {e}")
                continue

            stored += 1
            for company in self.classifier.extract_mentioned_companies(f"{item.title} {item.content}"):
                try:
                    self.store.upsert_trending_company(company, item.sentiment)
                except Exception as e:
                    logger.error(f"[Refresh] Failed to count mention of {company} in {item.id}: {e}")
        return stored

    def _log_fetch(self, family: str, status: str, count: int, error: Optional[str], duration_ms: int):
        try:
            self.store.append_fetch_log(family, status, count, error, duration_ms)
        except Exception as e:
            logger.error(f"[Refresh] Failed to write fetch log for {family}: {e}")

    def invalidate_cache(self):
        self.cache.invalidate_prefix(CacheKeys.FEED_PREFIX)
        for key in (
            CacheKeys.TRENDING,
            CacheKeys.SIDEBAR_STATS,
            CacheKeys.ADMIN_STATS,
            CacheKeys.TOP_DISRUPTION,
            CacheKeys.KEYWORDS,
        ):
            self.cache.invalidate(key)

    async def refresh_funding(self) -> Tuple[int, FundingFetchResult]:
        """
        Seed the curated rounds if needed, then pull funding news

        Returns:
            (rows seeded in this call, extractor result)
        """
        async with self.http_factory() as http:
            return await self._refresh_funding(http)

    async def _refresh_funding(self, http: HttpClient) -> Tuple[int, FundingFetchResult]:
        started = time.monotonic()
        seeded = 0
        try:
            seeded = seed_funding_data(self.store)
            result = await self.funding_extractor.fetch_and_store(http, self.store)
        except Exception as e:
            logger.exception(f"[Funding] Refresh failed: {e}")
            self._log_fetch('funding', 'error', 0, str(e), _elapsed_ms(started))
            return seeded, FundingFetchResult(errors=1)

        status = 'partial' if result.errors else 'success'
        error = f"{result.errors} store errors" if result.errors else None
        self._log_fetch('funding', status, result.inserted, error, _elapsed_ms(started))
        return seeded, result
