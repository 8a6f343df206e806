"""Tests for domain constants"""

import pytest

from sweep_gauge.domain.constants import (
    DEFAULT_MAX_COMBINATIONS,
    DEFAULT_MAX_CONCURRENT_CALLS,
    GENERIC_ERROR_MESSAGE,
    MAX_RANGE_VALUES,
    SCORE_WEIGHTS,
)


def test_score_weights_sum_to_one():
    assert sum(SCORE_WEIGHTS.values()) == pytest.approx(1.0)


def test_score_weights_cover_all_sub_scores():
    assert set(SCORE_WEIGHTS) == {"coherence", "relevancy", "completeness", "repetition", "length"}


def test_default_limits():
    assert DEFAULT_MAX_COMBINATIONS == 20
    assert DEFAULT_MAX_CONCURRENT_CALLS == 5


def test_full_ranges_exceed_default_limit():
    """5 x 5 values are allowed per range but exceed the combination limit"""
    assert MAX_RANGE_VALUES * MAX_RANGE_VALUES > DEFAULT_MAX_COMBINATIONS


def test_generic_error_message():
    assert GENERIC_ERROR_MESSAGE == "Something went wrong. Please try again later."
