"""
Experiment Queries

Read, list, report on, export and delete stored experiments.

Validation and not-found errors reach the caller unchanged; any other failure
is logged and re-raised as OrchestrationError with a generic message.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager

from sweep_gauge.domain.constants import LIST_PREVIEW_CHARS, METRICS_PREVIEW_CHARS
from sweep_gauge.domain.entities import Experiment, Response
from sweep_gauge.domain.exceptions import NotFoundError, OrchestrationError, ValidationError
from sweep_gauge.domain.reports import (
    BestResponsePreview,
    ExperimentDetail,
    ExperimentList,
    ExperimentListItem,
    ExperimentMetricsReport,
    ResponsePreview,
)
from sweep_gauge.exporter import export
from sweep_gauge.infrastructure.storage.base import ExperimentStore
from sweep_gauge.use_cases.aggregation import aggregate_responses

logger = logging.getLogger(__name__)


@contextmanager
def _client_errors_only(action: str, experiment_id: str | None = None):
    try:
        yield
    except (ValidationError, NotFoundError):
        raise
    except Exception as e:
        logger.exception("Failed to %s", action)
        raise OrchestrationError(experiment_id=experiment_id) from e


def _find_response(responses: list[Response], response_id: str | None) -> Response | None:
    if response_id is None:
        return None
    return next((r for r in responses if r.id == response_id), None)


class ExperimentQueries:
    """Query operations over an ExperimentStore"""

    def __init__(self, store: ExperimentStore):
        self.store = store

    def _require_experiment(self, experiment_id: str) -> Experiment:
        experiment = self.store.get_experiment(experiment_id)
        if experiment is None:
            raise NotFoundError(experiment_id)
        return experiment

    def get_experiment(self, experiment_id: str) -> ExperimentDetail:
        """
        Experiment with all of its responses and its best response

        Raises:
            NotFoundError: If the experiment does not exist
        """
        with _client_errors_only(f"get experiment {experiment_id}", experiment_id):
            experiment = self._require_experiment(experiment_id)
            responses = self.store.list_responses(experiment_id)
            return ExperimentDetail(
                experiment=experiment,
                responses=responses,
                best_response=_find_response(responses, experiment.best_response_id),
            )

    def list_experiments(self, limit: int = 20, cursor: str | None = None) -> ExperimentList:
        """
        One page of experiments, newest first

        Args:
            limit: Page size
            cursor: next_cursor of the previous page

        Returns:
            ExperimentList
        """
        with _client_errors_only("list experiments"):
            page = self.store.list_experiments(limit=limit, cursor=cursor)
            items = [self._list_item(experiment) for experiment in page.experiments]
            return ExperimentList(items=items, has_more=page.has_more, next_cursor=page.next_cursor)

    def _list_item(self, experiment: Experiment) -> ExperimentListItem:
        preview = None
        if experiment.best_response_id:
            best = _find_response(
                self.store.list_responses(experiment.id), experiment.best_response_id
            )
            if best is not None:
                text = best.response_text[:LIST_PREVIEW_CHARS]
                if len(best.response_text) > LIST_PREVIEW_CHARS:
                    text += "..."
                preview = BestResponsePreview(
                    response_text=text,
                    overall_score=best.overall_score or 0.0,
                    parameters=best.parameters,
                )
        return ExperimentListItem(
            id=experiment.id,
            prompt=experiment.prompt,
            created_at=experiment.created_at,
            status=experiment.status,
            total_responses=experiment.total_responses,
            average_score=experiment.average_score or 0.0,
            best_response=preview,
        )

    def get_experiment_metrics(self, experiment_id: str) -> ExperimentMetricsReport:
        """
        Score summary, histogram, per-parameter breakdown and response previews

        Only successful responses are counted and previewed.

        Raises:
            NotFoundError: If the experiment does not exist
        """
        with _client_errors_only(f"get metrics for experiment {experiment_id}", experiment_id):
            experiment = self._require_experiment(experiment_id)
            responses = self.store.list_responses(experiment_id)
            summary = aggregate_responses(responses)
            successes = [r for r in responses if r.is_success]

            return ExperimentMetricsReport(
                experiment_id=experiment_id,
                prompt=experiment.prompt,
                total_responses=summary.success_count,
                average_score=experiment.average_score or 0.0,
                best_score=experiment.best_score or 0.0,
                worst_score=summary.worst_score,
                score_histogram=summary.histogram,
                metric_breakdown=summary.metric_breakdown,
                responses=[
                    ResponsePreview(
                        id=r.id,
                        parameters=r.parameters,
                        metrics=r.metrics,
                        response_preview=r.response_text[:METRICS_PREVIEW_CHARS] + "...",
                    )
                    for r in successes
                ],
            )

    def delete_experiment(self, experiment_id: str) -> None:
        """
        Delete an experiment and all of its responses

        Responses go first, in one bulk operation.

        Raises:
            NotFoundError: If the experiment does not exist
        """
        with _client_errors_only(f"delete experiment {experiment_id}", experiment_id):
            self._require_experiment(experiment_id)
            self.store.delete_all_responses(experiment_id)
            self.store.delete_experiment(experiment_id)
            logger.info("Deleted experiment %s", experiment_id)

    def export_experiment(self, experiment_id: str, format: str = "json") -> str:
        """
        Serialize an experiment as JSON or CSV

        Raises:
            ValidationError: If the format is not supported
            NotFoundError: If the experiment does not exist
        """
        detail = self.get_experiment(experiment_id)
        with _client_errors_only(f"export experiment {experiment_id}", experiment_id):
            return export(detail, format)
