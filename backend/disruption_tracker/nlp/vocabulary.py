"""
Classification vocabulary.

Keyword lists used by the text classifier, kept apart from the algorithms so
they can be swapped or extended without touching classifier code. The
vocabulary is loaded once at process start and is immutable afterwards.
"""

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple
from loguru import logger


# Declaration order is the tie-break priority for category detection
CATEGORY_KEYWORDS = {
    'Layoffs': (
        'layoff', 'layoffs', 'laid off', 'job cut', 'job cuts', 'firing',
        'fired', 'workforce reduction', 'headcount reduction', 'downsizing',
        'restructuring', 'redundan', 'rif ', 'reduction in force',
    ),
    'Funding': (
        'funding', 'raises', 'raised', 'series a', 'series b', 'series c',
        'seed round', 'investment', 'investor', 'valuation', 'unicorn',
        'billion', 'million', 'vc ', 'venture capital', 'capital', 'ipo',
        'pre-ipo', 'backed by',
    ),
    'Product Launch': (
        'launch', 'launches', 'released', 'release', 'unveil', 'unveils',
        'announce', 'announces', 'debut', 'new model', 'new product',
        'new feature', 'introducing', 'now available', 'ships', 'shipping',
        'rolls out', 'gpt-', 'claude ', 'gemini', 'llm release',
    ),
    'Regulation': (
        'regulation', 'regulate', 'regulator', 'ban', 'banned', 'law',
        'legislation', 'congress', 'senate', 'eu ai', 'ai act', 'policy',
        'compliance', 'fine', 'lawsuit', 'antitrust', 'investigation',
        'probe', 'ftc', 'doj', 'sec', 'audit', 'safety board',
    ),
    'Breakthrough': (
        'breakthrough', 'groundbreaking', 'state of the art', 'sota',
        'achieves', 'surpasses', 'human-level', 'superhuman', 'agi',
        'superintelligence', 'benchmark', 'record', 'milestone', 'first ever',
        'revolutionary', 'discovery', 'research paper', 'arxiv',
    ),
    'Acquisition': (
        'acqui', 'acquires', 'acquired', 'merger', 'merges', 'buyout',
        'takeover', 'purchase', 'deal', 'billion deal', 'buys', 'bought',
    ),
}

RELEVANCE_TERMS = (
    'ai', 'artificial intelligence', 'machine learning', 'llm', 'gpt', 'openai',
    'anthropic', 'deepmind', 'chatgpt', 'generative', 'agi', 'neural',
    'automation', 'robot', 'claude', 'gemini', 'copilot', 'mistral',
)

POSITIVE_WORDS = (
    'breakthrough', 'launches', 'launch', 'fund', 'raises', 'raised', 'invest',
    'growth', 'revenue', 'profit', 'success', 'win', 'wins', 'milestone',
    'achieve', 'achieves', 'surpass', 'record', 'innovative', 'revolutionary',
    'exciting', 'impressive', 'amazing', 'great', 'best', 'leading', 'advance',
    'accelerate', 'partnership', 'collaboration', 'approved', 'approve',
    'positive', 'opportunity', 'expand', 'expansion', 'hire', 'hiring',
    'growing', 'profitable', 'unicorn', 'ipo', 'series', 'billion',
)

NEGATIVE_WORDS = (
    'layoff', 'layoffs', 'fired', 'cut', 'cuts', 'reduce', 'reduction',
    'decline', 'drop', 'fall', 'lose', 'loss', 'losses', 'crisis', 'concern',
    'problem', 'issue', 'failure', 'fail', 'ban', 'banned', 'lawsuit',
    'fine', 'probe', 'investigation', 'fraud', 'danger', 'risk', 'threat',
    'harmful', 'bias', 'discrimination', 'hack', 'breach', 'leak', 'scam',
    'controversy', 'backlash', 'criticism', 'criticize', 'shutdown', 'close',
    'bankrupt', 'crash', 'warning', 'downgrade', 'worse', 'worst', 'delayed',
    'cancelled', 'cancel', 'halted', 'halt', 'suspended', 'suspension',
    'resignation', 'resign', 'quit', 'leaving', 'departure',
)

NEGATION_TOKENS = ('not', 'no', "n't")

KNOWN_COMPANIES = (
    'OpenAI', 'Anthropic', 'Google', 'Meta', 'Microsoft', 'Apple', 'Amazon',
    'Nvidia', 'Tesla', 'xAI', 'Mistral', 'Cohere', 'Stability AI', 'Midjourney',
    'Hugging Face', 'DeepMind', 'Gemini', 'Claude', 'ChatGPT', 'Copilot',
    'Perplexity', 'Character.AI', 'Inflection', 'Runway', 'ElevenLabs',
    'Scale AI', 'Databricks', 'Together AI', 'Groq', 'Cerebras',
)

TOPIC_KEYWORDS = (
    'AI', 'LLM', 'AGI', 'GPT', 'machine learning', 'deep learning',
    'neural network', 'computer vision', 'NLP', 'robotics', 'automation',
    'chatbot', 'generative AI', 'foundation model', 'fine-tuning', 'inference',
)


@dataclass(frozen=True)
class Vocabulary:
    """Immutable keyword lists consumed by TextClassifier"""
    category_keywords: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType(dict(CATEGORY_KEYWORDS))
    )
    relevance_terms: Tuple[str, ...] = RELEVANCE_TERMS
    positive_words: frozenset = frozenset(POSITIVE_WORDS)
    negative_words: frozenset = frozenset(NEGATIVE_WORDS)
    negation_tokens: frozenset = frozenset(NEGATION_TOKENS)
    known_companies: Tuple[str, ...] = KNOWN_COMPANIES
    topic_keywords: Tuple[str, ...] = TOPIC_KEYWORDS


DEFAULT_VOCABULARY = Vocabulary()

_LIST_FIELDS = ('relevance_terms', 'known_companies', 'topic_keywords')
_SET_FIELDS = ('positive_words', 'negative_words', 'negation_tokens')


def vocabulary_from_dict(data: dict, base: Vocabulary = DEFAULT_VOCABULARY) -> Vocabulary:
    """
    Build a vocabulary by overriding any subset of the base lists

    Unknown keys are ignored with a warning. Category keyword overrides keep
    the base declaration order; new categories are not accepted since the
    category set is fixed.
    """
    overrides = {}

    for name in _LIST_FIELDS:
        if name in data:
            overrides[name] = tuple(str(term) for term in data[name])

    for name in _SET_FIELDS:
        if name in data:
            overrides[name] = frozenset(str(term).lower() for term in data[name])

    if 'category_keywords' in data:
        categories = dict(base.category_keywords)
        for category, keywords in data['category_keywords'].items():
            if category not in categories:
                logger.warning(f"Ignoring keywords for unknown category '{category}'")
                continue
            categories[category] = tuple(str(kw).lower() for kw in keywords)
        overrides['category_keywords'] = MappingProxyType(categories)

    known = set(_LIST_FIELDS) | set(_SET_FIELDS) | {'category_keywords'}
    for key in data:
        if key not in known:
            logger.warning(f"Ignoring unknown vocabulary key '{key}'")

    return replace(base, **overrides)


def load_vocabulary(path: Optional[str] = None) -> Vocabulary:
    """
    Load the classification vocabulary

    Args:
        path: Optional JSON file overriding some or all of the default lists

    Returns:
        Vocabulary instance (the defaults when no path is given)
    """
    if not path:
        return DEFAULT_VOCABULARY

    with open(Path(path), encoding='utf-8') as f:
        data = json.load(f)

    vocabulary = vocabulary_from_dict(data)
    logger.info(f"Loaded classification vocabulary overrides from {path}")
    return vocabulary
