"""Tests for domain value objects"""

import pytest

from sweep_gauge.domain.exceptions import ValidationError
from sweep_gauge.domain.value_objects import (
    ExperimentRequest,
    GenerationTask,
    MetricBreakdown,
    MetricDetails,
    ParameterRanges,
    QualityMetrics,
    ScoreDistribution,
)


class TestParameterRanges:

    def test_construction_converts_to_float_tuples(self):
        ranges = ParameterRanges(temperatures=[0, 1], top_p=[1])
        assert ranges.temperatures == (0.0, 1.0)
        assert ranges.top_p == (1.0,)
        assert all(isinstance(v, float) for v in ranges.temperatures)

    def test_order_preserved(self):
        ranges = ParameterRanges(temperatures=[1.0, 0.3, 0.7], top_p=[1.0, 0.9])
        assert ranges.temperatures == (1.0, 0.3, 0.7)
        assert ranges.top_p == (1.0, 0.9)

    def test_combination_count(self):
        ranges = ParameterRanges(temperatures=[0.3, 0.7, 1.0], top_p=[0.9, 1.0])
        assert ranges.combination_count == 6

    def test_bounds_are_inclusive(self):
        ranges = ParameterRanges(temperatures=[0.0, 2.0], top_p=[0.0, 1.0])
        assert ranges.combination_count == 4

    @pytest.mark.parametrize("temperatures", [[-0.1], [2.1], [float("nan")]])
    def test_temperature_out_of_range(self, temperatures):
        with pytest.raises(ValidationError, match="temperatures"):
            ParameterRanges(temperatures=temperatures, top_p=[0.9])

    @pytest.mark.parametrize("top_p", [[-0.01], [1.01]])
    def test_top_p_out_of_range(self, top_p):
        with pytest.raises(ValidationError, match="top_p"):
            ParameterRanges(temperatures=[0.7], top_p=top_p)

    def test_empty_range_rejected(self):
        with pytest.raises(ValidationError, match="between 1 and 5"):
            ParameterRanges(temperatures=[], top_p=[0.9])

    def test_too_many_values_rejected(self):
        with pytest.raises(ValidationError, match="got 6"):
            ParameterRanges(temperatures=[0.1, 0.2, 0.3, 0.4, 0.5, 0.6], top_p=[0.9])

    @pytest.mark.parametrize("values", ["0.7", [True], ["hot"], [None]])
    def test_non_numeric_rejected(self, values):
        with pytest.raises(ValidationError):
            ParameterRanges(temperatures=values, top_p=[0.9])

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            ParameterRanges(temperatures=[5.0], top_p=[0.9])

    def test_frozen(self):
        ranges = ParameterRanges(temperatures=[0.7], top_p=[0.9])
        with pytest.raises(AttributeError):
            ranges.temperatures = (1.0,)

    def test_dict_round_trip(self):
        ranges = ParameterRanges(temperatures=[0.3, 0.7], top_p=[0.9])
        assert ranges.to_dict() == {"temperatures": [0.3, 0.7], "top_p": [0.9]}
        assert ParameterRanges.from_dict(ranges.to_dict()) == ranges


class TestExperimentRequest:

    RANGES = ParameterRanges(temperatures=[0.7], top_p=[0.9])

    def test_valid(self):
        request = ExperimentRequest(prompt="Hello", parameter_ranges=self.RANGES)
        assert request.model is None

    def test_max_length_prompt_accepted(self):
        ExperimentRequest(prompt="x" * 500, parameter_ranges=self.RANGES)

    def test_prompt_too_long(self):
        with pytest.raises(ValidationError, match="got 501"):
            ExperimentRequest(prompt="x" * 501, parameter_ranges=self.RANGES)

    @pytest.mark.parametrize("prompt", ["", "   ", "\n\t"])
    def test_blank_prompt(self, prompt):
        with pytest.raises(ValidationError, match="must not be empty"):
            ExperimentRequest(prompt=prompt, parameter_ranges=self.RANGES)

    def test_blank_model(self):
        with pytest.raises(ValidationError, match="model"):
            ExperimentRequest(prompt="Hello", parameter_ranges=self.RANGES, model=" ")


class TestGenerationTask:

    def test_dict_round_trip(self):
        task = GenerationTask(temperature=0.7, top_p=0.9, model="m")
        assert task.to_dict() == {"temperature": 0.7, "top_p": 0.9, "model": "m"}
        assert GenerationTask.from_dict(task.to_dict()) == task


class TestQualityMetrics:

    def _metrics(self):
        details = MetricDetails(
            word_count=10,
            sentence_count=2,
            paragraph_count=1,
            avg_sentence_length=5.0,
            avg_word_length=4.2,
            unique_word_ratio=0.9,
            punctuation_ratio=0.2,
            repeated_phrases=0,
            max_repeated_phrase_length=0,
            has_proper_ending=True,
            prompt_keywords=("quantum",),
            response_keywords=("quantum", "qubits"),
            shared_keywords=("quantum",),
            keyword_overlap_ratio=1.0,
        )
        return QualityMetrics(
            coherence_score=0.8,
            relevancy_score=0.9,
            completeness_score=1.0,
            repetition_score=1.0,
            length_score=0.3,
            overall_score=0.86,
            details=details,
        )

    def test_to_dict_nests_details_with_lists(self):
        data = self._metrics().to_dict()
        assert data["overall_score"] == 0.86
        assert data["details"]["word_count"] == 10
        assert data["details"]["shared_keywords"] == ["quantum"]

    def test_from_dict_restores_tuples(self):
        metrics = self._metrics()
        restored = QualityMetrics.from_dict(metrics.to_dict())
        assert restored == metrics
        assert isinstance(restored.details.response_keywords, tuple)


class TestStatistics:

    def test_score_distribution_defaults(self):
        assert ScoreDistribution().to_dict() == {
            "min": 0.0, "max": 0.0, "mean": 0.0, "median": 0.0, "std_dev": 0.0,
        }

    def test_metric_breakdown_to_dict_copies(self):
        breakdown = MetricBreakdown(by_temperature={"0.7": 0.5}, by_top_p={"1": 0.5})
        data = breakdown.to_dict()
        data["by_temperature"]["0.7"] = 0.0
        assert breakdown.by_temperature["0.7"] == 0.5
