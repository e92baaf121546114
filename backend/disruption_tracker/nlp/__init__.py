from disruption_tracker.nlp.vocabulary import Vocabulary, DEFAULT_VOCABULARY, load_vocabulary
from disruption_tracker.nlp.classifier import (
    TextClassifier,
    extract_funding_amount,
    extract_layoff_numbers,
    funding_display_to_millions,
)

__all__ = [
    "Vocabulary",
    "DEFAULT_VOCABULARY",
    "load_vocabulary",
    "TextClassifier",
    "extract_funding_amount",
    "extract_layoff_numbers",
    "funding_display_to_millions",
]
