"""
Keyword-based text classification for feed items.

Everything here is a deterministic function of the input text and the
vocabulary the classifier was built with. No I/O, no mutable state.
"""

import re
from typing import List, Optional

from disruption_tracker.nlp.vocabulary import Vocabulary, DEFAULT_VOCABULARY
from disruption_tracker.schemas.feed import Category, Sentiment, GENERAL

POSITIVE_THRESHOLD = 1.5
NEGATIVE_THRESHOLD = -1.0
NEGATION_PENALTY = 0.5
MAX_TAGS = 8

_TOKEN_SPLIT = re.compile(r'\W+')

# Non-USD symbols are accepted but reported with a '$' prefix, unconverted
_FUNDING_AMOUNT = re.compile(
    r'[$€£¥]?\s*(\d[\d,]*(?:\.\d+)?)\s*(billion|million|b|m)\b',
    re.IGNORECASE,
)

_LAYOFF_PATTERNS = (
    re.compile(
        r'(\d[\d,]*)\s*(?:employees?|workers?|people|jobs?)\s*(?:laid off|cut|fired|let go)',
        re.IGNORECASE,
    ),
    re.compile(r'laid off\s+(\d[\d,]*)', re.IGNORECASE),
    re.compile(r'cut(?:ting)?\s+(\d[\d,]*)\s*(?:jobs?|positions?|roles?)', re.IGNORECASE),
)


class TextClassifier:
    """Relevance gate, category, sentiment and tag extraction over one vocabulary"""

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY):
        self.vocabulary = vocabulary
        self._relevance_terms = tuple(t.lower() for t in vocabulary.relevance_terms)
        self._categories = tuple(
            (category, tuple(kw.lower() for kw in keywords))
            for category, keywords in vocabulary.category_keywords.items()
            if category != GENERAL
        )
        self._companies = tuple((c, c.lower()) for c in vocabulary.known_companies)
        self._topics = tuple((t, t.lower()) for t in vocabulary.topic_keywords)

    def is_relevant(self, text: str) -> bool:
        """True when the text mentions at least one AI-domain term"""
        lower = (text or '').lower()
        return any(term in lower for term in self._relevance_terms)

    def detect_category(self, text: str) -> Category:
        """
        Pick the category with the most keyword hits

        Matching is plain substring containment, so short keywords can
        over-match. Equal scores go to the category declared first in the
        vocabulary. No hits at all gives General.
        """
        lower = (text or '').lower()
        best: Category = GENERAL
        best_score = 0

        for category, keywords in self._categories:
            score = sum(1 for kw in keywords if kw in lower)
            if score > best_score:
                best, best_score = category, score

        return best

    def analyze_sentiment(self, text: str) -> Sentiment:
        """
        Headline-level sentiment from positive/negative word counts

        Each negation token lowers both running tallies by 0.5 (floored at 0).
        Positive needs a margin of 1.5, negative only 1.
        """
        words = [w for w in _TOKEN_SPLIT.split((text or '').lower()) if w]
        vocab = self.vocabulary

        positive = 0.0
        negative = 0.0
        for word in words:
            if word in vocab.positive_words:
                positive += 1
            if word in vocab.negative_words:
                negative += 1
            if word in vocab.negation_tokens:
                positive = max(0.0, positive - NEGATION_PENALTY)
                negative = max(0.0, negative - NEGATION_PENALTY)

        diff = positive - negative
        if diff >= POSITIVE_THRESHOLD:
            return 'positive'
        if diff <= NEGATIVE_THRESHOLD:
            return 'negative'
        return 'neutral'

    def extract_tags(self, text: str) -> List[str]:
        """Known companies then topic keywords found in the text, at most 8"""
        lower = (text or '').lower()
        found = []
        for name, needle in self._companies + self._topics:
            if needle in lower and name not in found:
                found.append(name)
        return found[:MAX_TAGS]

    def extract_mentioned_companies(self, text: str) -> List[str]:
        lower = (text or '').lower()
        return [name for name, needle in self._companies if needle in lower]


def _format_number(value: float) -> str:
    return str(int(value)) if value.is_integer() else str(value)


def extract_funding_amount(text: str) -> Optional[str]:
    """
    First money amount in the text as '$NB' or '$NM'

    >>> extract_funding_amount("Startup raised $1.5B in new funding")
    '$1.5B'
    """
    match = _FUNDING_AMOUNT.search(text or '')
    if not match:
        return None

    number = float(match.group(1).replace(',', ''))
    unit = match.group(2).lower()
    suffix = 'B' if unit in ('billion', 'b') else 'M'
    return f"${_format_number(number)}{suffix}"


def extract_layoff_numbers(text: str) -> Optional[int]:
    """Headcount from the first matching layoff phrase, or None"""
    for pattern in _LAYOFF_PATTERNS:
        match = pattern.search(text or '')
        if not match:
            continue
        try:
            number = int(match.group(1).replace(',', ''))
        except ValueError:
            continue
        if number > 0:
            return number
    return None


def funding_display_to_millions(display: str) -> Optional[float]:
    """'$1.5B' -> 1500.0, '$40M' -> 40.0"""
    if not display:
        return None
    try:
        value = float(display.strip('$BM'))
    except ValueError:
        return None
    return value * 1000 if display.endswith('B') else value
