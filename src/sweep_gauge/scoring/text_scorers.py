"""
Text statistics

Tokenization, keyword extraction and repeated-phrase detection used to build
MetricDetails for a prompt/response pair.
"""

from __future__ import annotations

import math
import re

from sweep_gauge.domain.value_objects import MetricDetails

_WORD_PATTERN = re.compile(r"\b\w+\b")
_SENTENCE_PATTERN = re.compile(r"[^.!?]+[.!?]+")
_PARAGRAPH_SPLIT_PATTERN = re.compile(r"\n\s*\n")
_PUNCTUATION_PATTERN = re.compile(r"[.!?,;:]")
_PROPER_ENDING_PATTERN = re.compile(r"[.!?]$")

# Window sizes (in words) checked for repeated phrases
MIN_PHRASE_LENGTH = 3
MAX_PHRASE_LENGTH = 7

# Keywords must be longer than this many characters
MIN_KEYWORD_LENGTH = 3

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "as", "is", "was", "are", "were", "been", "be",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "can", "this", "that", "these", "those",
    "i", "you", "he", "she", "it", "we", "they",
    "what", "which", "who", "when", "where", "why", "how",
})


def tokenize_words(text: str) -> list[str]:
    """Split text into word-boundary tokens (case preserved)"""
    return _WORD_PATTERN.findall(text)


def split_sentences(text: str) -> list[str]:
    """Split text into sentences terminated by '.', '!' or '?'"""
    return _SENTENCE_PATTERN.findall(text)


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank lines, dropping empty paragraphs"""
    return [p for p in _PARAGRAPH_SPLIT_PATTERN.split(text) if p.strip()]


def has_proper_ending(text: str) -> bool:
    return bool(_PROPER_ENDING_PATTERN.search(text.strip()))


def extract_keywords(text: str) -> list[str]:
    """
    Extract the content keywords of a text

    Lower-cases the text, drops stop words and tokens of 3 characters or
    fewer, and de-duplicates while keeping first-occurrence order.

    Args:
        text: Prompt or response text

    Returns:
        Ordered list of unique keywords
    """
    words = tokenize_words(text.lower())
    keywords = [w for w in words if len(w) > MIN_KEYWORD_LENGTH and w not in STOP_WORDS]
    return list(dict.fromkeys(keywords))


def find_repeated_phrases(words: list[str]) -> tuple[int, int]:
    """
    Detect repeated 3 to 7 word phrases

    Each distinct phrase is counted once, at the moment it is seen for the
    second time.

    Args:
        words: Word tokens of the response

    Returns:
        (number of repeated phrases, longest repeated phrase length in words)
    """
    seen: dict[str, int] = {}
    repeated = 0
    max_length = 0

    for length in range(MIN_PHRASE_LENGTH, MAX_PHRASE_LENGTH + 1):
        for start in range(len(words) - length + 1):
            phrase = " ".join(words[start:start + length]).lower()
            count = seen.get(phrase, 0)
            seen[phrase] = count + 1
            if count == 1:
                repeated += 1
                max_length = max(max_length, length)

    return repeated, max_length


def gaussian(value: float, optimal: float, tolerance: float) -> float:
    """Bell curve equal to 1.0 at `optimal`"""
    return math.exp(-((value - optimal) ** 2) / (2 * tolerance * tolerance))


def extract_details(prompt: str, response: str) -> MetricDetails:
    """
    Compute the text statistics of a response relative to its prompt

    Divisors that would be zero are replaced by 1.

    Args:
        prompt: Prompt the response was generated for
        response: Generated text

    Returns:
        MetricDetails
    """
    words = tokenize_words(response)
    word_count = len(words)
    sentence_count = len(split_sentences(response)) or 1
    unique_words = {w.lower() for w in words}
    punctuation_count = len(_PUNCTUATION_PATTERN.findall(response))

    repeated_phrases, max_repeated_length = find_repeated_phrases(words)

    prompt_keywords = extract_keywords(prompt)
    response_keywords = extract_keywords(response)
    response_keyword_set = set(response_keywords)
    shared_keywords = [kw for kw in prompt_keywords if kw in response_keyword_set]

    divisor = word_count or 1
    return MetricDetails(
        word_count=word_count,
        sentence_count=sentence_count,
        paragraph_count=len(split_paragraphs(response)),
        avg_sentence_length=word_count / sentence_count,
        avg_word_length=sum(len(w) for w in words) / divisor,
        unique_word_ratio=len(unique_words) / divisor,
        punctuation_ratio=punctuation_count / divisor,
        repeated_phrases=repeated_phrases,
        max_repeated_phrase_length=max_repeated_length,
        has_proper_ending=has_proper_ending(response),
        prompt_keywords=tuple(prompt_keywords),
        response_keywords=tuple(response_keywords),
        shared_keywords=tuple(shared_keywords),
        keyword_overlap_ratio=len(shared_keywords) / (len(prompt_keywords) or 1),
    )
