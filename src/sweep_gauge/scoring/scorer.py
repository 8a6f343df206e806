"""
Text quality scoring

Scores a response on coherence, relevancy, completeness, repetition and
length, and combines them into a weighted overall score. Every score is
rounded to 3 decimals and lies within [0, 1].
"""

from __future__ import annotations

import logging
import math

from sweep_gauge.domain.constants import SCORE_WEIGHTS
from sweep_gauge.domain.value_objects import MetricDetails, QualityMetrics
from sweep_gauge.scoring.text_scorers import extract_details, gaussian

logger = logging.getLogger(__name__)

# (max prompt keywords, optimal word count, tolerance)
_LENGTH_PROFILES = [
    (3, 100, 200),   # simple question
    (6, 300, 250),   # medium question
]
_COMPLEX_LENGTH_PROFILE = (500, 300)

SHORT_RESPONSE_WORDS = 10


def _round(value: float) -> float:
    # Exact halves round up
    return math.floor(value * 1000 + 0.5) / 1000


def score_length(details: MetricDetails) -> float:
    """
    Length appropriateness, adapted to prompt complexity

    Prompts with more keywords expect longer answers. Responses under
    10 words are penalized regardless of the prompt.
    """
    keyword_count = len(details.prompt_keywords)
    optimal, tolerance = _COMPLEX_LENGTH_PROFILE
    for max_keywords, profile_optimal, profile_tolerance in _LENGTH_PROFILES:
        if keyword_count <= max_keywords:
            optimal, tolerance = profile_optimal, profile_tolerance
            break

    score = gaussian(details.word_count, optimal, tolerance)
    if details.word_count < SHORT_RESPONSE_WORDS:
        score *= 0.3
    return _round(score)


def score_coherence(details: MetricDetails) -> float:
    """Sentence length (ideal ~20 words), punctuation use, proper ending"""
    score = 0.4 * gaussian(details.avg_sentence_length, 20, 10)
    score += 0.3 * min(details.punctuation_ratio * 10, 1.0)
    score += 0.3 if details.has_proper_ending else 0.0
    return _round(score)


def score_completeness(details: MetricDetails) -> float:
    """Penalizes responses that look truncated"""
    score = 1.0
    if not details.has_proper_ending:
        score -= 0.6
        if details.word_count < SHORT_RESPONSE_WORDS:
            score -= 0.4
    return _round(max(score, 0.0))


def score_repetition(details: MetricDetails) -> float:
    """Higher is better: penalizes repeated phrases and long loops"""
    penalty = (
        details.repeated_phrases * details.max_repeated_phrase_length
        / (details.word_count or 1)
    )
    score = 1.0 - min(penalty * 2, 0.7)
    if details.max_repeated_phrase_length > 5:
        score -= 0.2
    return _round(max(score, 0.0))


def score_relevancy(details: MetricDetails) -> float:
    """Keyword overlap with the prompt plus a response-size term"""
    prompt_keyword_count = len(details.prompt_keywords)

    score = 0.6 * details.keyword_overlap_ratio
    if len(details.shared_keywords) >= min(3, prompt_keyword_count):
        score += 0.2

    # Rough prompt size estimate: two words per keyword
    expected_words = max(prompt_keyword_count * 2 * 10, 100)
    score += 0.2 * gaussian(details.word_count / expected_words, 1, 2)
    return _round(min(score, 1.0))


def overall_score(
    coherence: float,
    relevancy: float,
    completeness: float,
    repetition: float,
    length: float,
) -> float:
    """Weighted sum of the five sub-scores"""
    total = (
        SCORE_WEIGHTS["coherence"] * coherence
        + SCORE_WEIGHTS["relevancy"] * relevancy
        + SCORE_WEIGHTS["completeness"] * completeness
        + SCORE_WEIGHTS["repetition"] * repetition
        + SCORE_WEIGHTS["length"] * length
    )
    return _round(total)


def calculate_metrics(prompt: str, response: str) -> QualityMetrics:
    """
    Score a response against its prompt

    Deterministic and side-effect free; empty inputs are valid.

    Args:
        prompt: Prompt the response was generated for
        response: Generated text

    Returns:
        QualityMetrics with the five sub-scores, the overall score and details
    """
    details = extract_details(prompt, response)

    coherence = score_coherence(details)
    relevancy = score_relevancy(details)
    completeness = score_completeness(details)
    repetition = score_repetition(details)
    length = score_length(details)

    metrics = QualityMetrics(
        coherence_score=coherence,
        relevancy_score=relevancy,
        completeness_score=completeness,
        repetition_score=repetition,
        length_score=length,
        overall_score=overall_score(coherence, relevancy, completeness, repetition, length),
        details=details,
    )
    logger.debug(
        "Scored response: words=%d overall=%.3f", details.word_count, metrics.overall_score
    )
    return metrics
