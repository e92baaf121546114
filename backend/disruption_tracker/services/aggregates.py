from typing import Iterable, Optional

from disruption_tracker.nlp import extract_layoff_numbers, extract_funding_amount, funding_display_to_millions
from disruption_tracker.schemas.feed import FeedItemSchema


def format_funding_total(total_m: float) -> Optional[str]:
    """'$X.YB' from 1000M upward, '$NM' below, None for nothing"""
    if total_m <= 0:
        return None
    if total_m >= 1000:
        return f"${total_m / 1000:.1f}B"
    return f"${total_m:.0f}M"


def summarize_disruption(items: Iterable[FeedItemSchema]) -> dict:
    """
    Headline totals for the sidebar

    Sums reported layoffs over Layoffs items and funding amounts over
    Funding items. Each total is None when nothing could be extracted.
    """
    total_layoffs = None
    total_funding_m = 0.0

    for item in items:
        text = f"{item.title} {item.content}"
        if item.category == 'Layoffs':
            count = extract_layoff_numbers(text)
            if count:
                total_layoffs = (total_layoffs or 0) + count
        elif item.category == 'Funding':
            amount = funding_display_to_millions(extract_funding_amount(text))
            if amount:
                total_funding_m += amount

    return {
        'total_layoffs': total_layoffs,
        'total_funding': format_funding_total(total_funding_m),
    }
