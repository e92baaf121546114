"""
Funding round extraction from funding-news RSS feeds.

Headlines like "Acme raises $40M Series B" are turned into FundingRound
records. Anything without a recognizable amount and company is dropped and
counted as skipped.
"""

import re
from datetime import date
from typing import List, Optional

from loguru import logger

from disruption_tracker.config import settings
from disruption_tracker.feed_config import FUNDING_RSS_FEEDS, RSS_ACCEPT
from disruption_tracker.schemas.funding import FundingRoundSchema, FundingFetchResult
from disruption_tracker.services.feed_parser import ParsedEntry, parse_feed, FeedParseError
from disruption_tracker.services.http_client import HttpClient, UpstreamError
from disruption_tracker.utils.content_hash import slugify
from disruption_tracker.utils.timeutils import utcnow

_AMOUNT = re.compile(r'([€$£¥])\s*(\d[\d,]*(?:\.\d+)?)\s*([BMK])', re.IGNORECASE)

_COMPANY = re.compile(
    r"^([A-Z][A-Za-z0-9\s.,'&-]{2,40}?)\s+"
    r"(?:raises?|secures?|closes?|lands?|gets?|nets?|bags?|announces?|completes?)\b",
    re.IGNORECASE,
)

_SERIES = re.compile(r'series\s+([a-h])\b', re.IGNORECASE)

# Checked in order, first hit wins
_INDUSTRY_RULES = [
    ('AI Robotics', ('robot',)),
    ('Autonomous Vehicles', ('self-driving', 'autonomous vehicle', 'waymo', 'cruise')),
    ('AI Healthcare', ('drug', 'pharma', 'medic', 'health', 'genomic')),
    ('AI Legal', ('legal', 'law firm', 'attorney')),
    ('AI Security', ('security', 'cybersec')),
    ('AI Dev Tools', ('code', 'coding', 'developer', 'programming')),
    ('AI Search', ('search', 'perplexity')),
    ('AI Video', ('video', 'animation')),
    ('AI Audio', ('audio', 'voice', 'speech', 'music')),
    ('AI Infrastructure', ('chip', 'semiconductor', 'hardware', 'inference', 'gpu')),
    ('AI Enterprise', ('enterprise', 'b2b', 'saas')),
    ('AI Agents', ('agent',)),
    ('AI Open Source', ('open source', 'open-source', 'hugging')),
    ('AI Safety', ('safety', 'alignment')),
    ('AI Customer Service', ('customer service', 'support', 'chatbot')),
    ('AI Data', ('data', 'dataset', 'annotation')),
    ('AI Foundation Models', ('model', 'foundation', 'llm', 'language model')),
]

_LOCATION_RULES = [
    ('China', re.compile(r'beijing|china|shanghai|hangzhou|shenzhen', re.IGNORECASE)),
    ('London, UK', re.compile(r'london|\buk\b|united kingdom', re.IGNORECASE)),
    ('Paris, France', re.compile(r'paris|france', re.IGNORECASE)),
    ('Toronto, Canada', re.compile(r'toronto|canada', re.IGNORECASE)),
    ('New York, US', re.compile(r'new york', re.IGNORECASE)),
    ('Seattle, US', re.compile(r'seattle', re.IGNORECASE)),
    ('San Francisco, US', re.compile(
        r'san francisco|sf bay|silicon valley|palo alto|menlo park|mountain view', re.IGNORECASE)),
    ('Tel Aviv, Israel', re.compile(r'israel|tel aviv', re.IGNORECASE)),
    ('India', re.compile(r'india|bangalore|bengaluru', re.IGNORECASE)),
    ('Singapore', re.compile(r'singapore', re.IGNORECASE)),
]


def parse_amount_to_millions(number: str, unit: str) -> Optional[float]:
    """
    Convert an amount and unit to millions

    >>> parse_amount_to_millions("1.5", "B")
    1500.0
    """
    try:
        value = float(number.replace(',', ''))
    except ValueError:
        return None

    unit = unit.upper()
    if unit == 'B':
        return float(round(value * 1000))
    if unit == 'M':
        return float(round(value))
    if unit == 'K':
        return float(round(value / 1000))
    return None


def guess_round_type(text: str) -> str:
    lowered = text.lower()
    series = _SERIES.search(lowered)
    if series:
        return f"Series {series.group(1).upper()}"
    if 'pre-seed' in lowered or 'preseed' in lowered:
        return 'Pre-Seed'
    if 'seed' in lowered:
        return 'Seed'
    if 'strategic' in lowered:
        return 'Strategic'
    if 'ipo' in lowered or 'public offering' in lowered:
        return 'IPO'
    if 'acquisition' in lowered or 'acquires' in lowered or 'acquired' in lowered:
        return 'Acquisition'
    if 'grant' in lowered:
        return 'Grant'
    return 'Undisclosed'


def guess_industry(text: str) -> str:
    lowered = text.lower()
    for industry, needles in _INDUSTRY_RULES:
        if any(needle in lowered for needle in needles):
            return industry
    return 'AI Platform'


def guess_location(text: str) -> str:
    for location, pattern in _LOCATION_RULES:
        if pattern.search(text):
            return location
    return 'US'


class FundingExtractor:
    """Turns funding headlines into FundingRoundSchema records"""

    def __init__(self, feeds: List[str] = None, min_amount_m: float = None):
        self.feeds = list(feeds if feeds is not None else FUNDING_RSS_FEEDS)
        self.min_amount_m = settings.FUNDING_MIN_AMOUNT_M if min_amount_m is None else min_amount_m

    def extract_round(self, entry: ParsedEntry, today: Optional[date] = None) -> Optional[FundingRoundSchema]:
        """
        Build a funding round from one feed entry

        Args:
            entry: Parsed feed entry (title, description, link, published)
            today: Fallback announcement date

        Returns:
            FundingRoundSchema, or None when no amount >= the minimum or no
            company name could be found
        """
        full_text = f"{entry.title} {entry.description}"

        amount = _AMOUNT.search(full_text)
        if not amount:
            return None

        symbol, number, unit = amount.groups()
        amount_m = parse_amount_to_millions(number, unit)
        if not amount_m or amount_m < self.min_amount_m:
            return None

        company = _COMPANY.match(entry.title)
        company_name = company.group(1).strip(" ,.-") if company else ''
        if not company_name:
            return None

        display = f"{symbol}{number.replace(',', '')}{unit.upper()}"
        announced = entry.published.date() if entry.published else (today or utcnow().date())

        return FundingRoundSchema(
            id=f"{slugify(company_name)}-{slugify(display)}-{announced.strftime('%Y%m')}",
            company_name=company_name,
            funding_amount_m=amount_m,
            funding_display=display,
            round_type=guess_round_type(full_text),
            investors=[],
            industry=guess_industry(full_text),
            location=guess_location(full_text),
            announced_date=announced,
            source_url=entry.link,
            description=entry.title,
            valuation_display=None,
            is_seed_data=False,
        )

    async def fetch_entries(self, http: HttpClient, url: str) -> List[ParsedEntry]:
        """Entries of one funding feed; a failing feed yields nothing"""
        try:
            body = await http.get_bytes(url, headers={"Accept": RSS_ACCEPT})
            return parse_feed(body)
        except (UpstreamError, FeedParseError) as e:
            logger.warning(f"[Funding] Feed failed {url}: {e}")
            return []

    async def fetch_and_store(self, http: HttpClient, store) -> FundingFetchResult:
        """
        Run every funding feed, extract rounds and upsert them

        Rounds are de-duplicated by id within the run. Store failures are
        counted per round and do not stop the run.
        """
        result = FundingFetchResult()
        seen = set()

        for url in self.feeds:
            entries = await self.fetch_entries(http, url)
            result.fetched += len(entries)

            for entry in entries:
                funding_round = self.extract_round(entry)
                if funding_round is None:
                    logger.debug(f"[Funding] No round in: {entry.title[:80]}")
                    result.skipped += 1
                    continue
                if funding_round.id in seen:
                    result.skipped += 1
                    continue
                seen.add(funding_round.id)

                try:
                    store.upsert_funding_round(funding_round)
                    result.inserted += 1
                except Exception as e:
                    logger.error(f"[Funding] Failed to store {funding_round.id}: {e}")
                    result.errors += 1

        logger.info(
            f"[Funding] fetched={result.fetched} inserted={result.inserted} "
            f"skipped={result.skipped} errors={result.errors}"
        )
        return result
