"""Tests for progress events"""

import json

import pytest

from sweep_gauge.domain.events import (
    CompletePayload,
    ErrorPayload,
    Progress,
    ProgressEvent,
    StartedPayload,
    complete_event,
    error_event,
    processing_event,
    responses_generated_event,
    started_event,
)


class TestProgress:

    @pytest.mark.parametrize("current,percentage", [(1, 25), (2, 50), (3, 75), (4, 100)])
    def test_checkpoint(self, current, percentage):
        progress = Progress.checkpoint(current)
        assert progress.total == 4
        assert progress.percentage == percentage

    def test_none(self):
        assert Progress.none() == Progress(0, 0, 0)


class TestEventFactories:

    def test_started(self):
        event = started_event("exp-1", 6)
        assert event.type == "started"
        assert event.message == "Experiment created with 6 parameter combinations"
        assert event.progress.current == 1
        assert event.payload == StartedPayload("exp-1", 6)

    def test_processing_has_no_payload(self):
        event = processing_event(6)
        assert event.message == "Processing 6 parameter combinations..."
        assert event.progress.current == 2
        assert event.payload is None

    def test_responses_generated(self):
        event = responses_generated_event(5, 1)
        assert event.message == "Generated 5 responses (1 failed)"
        assert event.progress.percentage == 75

    def test_complete_with_best(self, make_response):
        event = complete_event(CompletePayload(
            experiment_id="exp-1",
            completed_responses=2,
            failed_responses=0,
            best_score=0.8123,
            average_score=0.7,
            best_response=make_response(0.8123),
        ))
        assert event.is_terminal
        assert event.progress.percentage == 100
        assert event.message.endswith("Best score: 0.812")

    def test_complete_without_best(self):
        event = complete_event(CompletePayload(
            experiment_id="exp-1",
            completed_responses=0,
            failed_responses=6,
            best_score=None,
            average_score=0.0,
            best_response=None,
        ))
        assert event.message.endswith("Best score: N/A")

    def test_error(self):
        event = error_event("Too many parameter combinations (25). Maximum allowed is 20")
        assert event.type == "error"
        assert event.is_terminal
        assert event.message.startswith("Error: Too many")
        assert event.progress == Progress(0, 0, 0)
        assert event.payload == ErrorPayload(None)


class TestPayloadValidation:

    def test_wrong_payload_type_rejected(self):
        with pytest.raises(ValueError, match="StartedPayload"):
            ProgressEvent(type="started", message="x", progress=Progress.checkpoint(1), payload=ErrorPayload())

    def test_processing_payload_rejected(self):
        with pytest.raises(ValueError, match="no payload"):
            ProgressEvent(
                type="processing", message="x", progress=Progress.checkpoint(2),
                payload=StartedPayload("e", 1),
            )

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError, match="Unknown event type"):
            ProgressEvent(type="halfway", message="x", progress=Progress.checkpoint(2))


class TestToDict:

    def test_processing_has_no_data(self):
        data = processing_event(4).to_dict()
        assert data == {
            "type": "processing",
            "message": "Processing 4 parameter combinations...",
            "progress": {"current": 2, "total": 4, "percentage": 50},
        }

    def test_started_data(self):
        data = started_event("exp-1", 4).to_dict()
        assert data["data"] == {"experiment_id": "exp-1", "total_combinations": 4}

    def test_complete_is_json_serializable(self, make_response):
        event = complete_event(CompletePayload(
            experiment_id="exp-1",
            completed_responses=1,
            failed_responses=0,
            best_score=0.9,
            average_score=0.9,
            best_response=make_response(0.9, response_id="r1"),
        ))
        data = json.loads(json.dumps(event.to_dict()))
        assert data["data"]["best_response"]["id"] == "r1"
        assert data["data"]["best_score"] == 0.9
