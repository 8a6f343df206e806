"""
Scoring sub-package

Provides deterministic text quality scoring.
"""

from sweep_gauge.domain.value_objects import MetricDetails, QualityMetrics
from sweep_gauge.scoring.scorer import (
    calculate_metrics,
    overall_score,
    score_coherence,
    score_completeness,
    score_length,
    score_relevancy,
    score_repetition,
)
from sweep_gauge.scoring.text_scorers import (
    STOP_WORDS,
    extract_details,
    extract_keywords,
    find_repeated_phrases,
    gaussian,
    tokenize_words,
)

__all__ = [
    # value objects (re-exported from domain)
    "MetricDetails",
    "QualityMetrics",
    # scorer
    "calculate_metrics",
    "overall_score",
    "score_coherence",
    "score_completeness",
    "score_length",
    "score_relevancy",
    "score_repetition",
    # text statistics
    "STOP_WORDS",
    "extract_details",
    "extract_keywords",
    "find_repeated_phrases",
    "gaussian",
    "tokenize_words",
]
