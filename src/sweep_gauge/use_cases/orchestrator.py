"""
Experiment Orchestration

Runs one parameter sweep end to end: expands the combinations, generates and
scores a response per combination on a bounded worker pool, persists every
outcome, aggregates the results and reports progress at four checkpoints.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

from sweep_gauge.domain.entities import (
    Experiment,
    ExperimentStatus,
    Response,
    ResponseStatus,
)
from sweep_gauge.domain.events import (
    CompletePayload,
    ProgressCallback,
    complete_event,
    error_event,
    processing_event,
    responses_generated_event,
    started_event,
)
from sweep_gauge.domain.exceptions import (
    NotFoundError,
    OrchestrationError,
    ProviderError,
    ValidationError,
)
from sweep_gauge.domain.reports import ExperimentRunResult
from sweep_gauge.domain.value_objects import ExperimentRequest, GenerationTask
from sweep_gauge.infrastructure.model_clients.base import ModelClient
from sweep_gauge.infrastructure.storage.base import ExperimentStore
from sweep_gauge.scoring.scorer import calculate_metrics
from sweep_gauge.sweep_config import SweepConfig, load_config
from sweep_gauge.use_cases.aggregation import aggregate_responses
from sweep_gauge.use_cases.combinations import (
    generate_parameter_combinations,
    validate_combination_count,
)

logger = logging.getLogger(__name__)


class ExperimentOrchestrator:
    """Drives experiments through pending -> processing -> completed | failed"""

    def __init__(
        self,
        store: ExperimentStore,
        model_client: ModelClient,
        config: SweepConfig | None = None,
    ):
        self.store = store
        self.model_client = model_client
        self.config = config if config is not None else load_config()

    def run(
        self,
        request: ExperimentRequest,
        on_progress: ProgressCallback | None = None,
    ) -> ExperimentRunResult:
        """
        Run a complete experiment

        Args:
            request: Prompt, parameter ranges and optional model
            on_progress: Called from this thread with each progress event

        Returns:
            ExperimentRunResult

        Raises:
            ValidationError: If the sweep is too large (nothing is created)
            NotFoundError: If the experiment disappears from the store mid-run
            OrchestrationError: On any other failure (experiment is marked failed)
        """
        emit = on_progress or (lambda event: None)
        model = request.model or self.config.experiment.default_model

        try:
            validate_combination_count(
                request.parameter_ranges.combination_count,
                self.config.experiment.max_combinations,
            )
            tasks = generate_parameter_combinations(request.parameter_ranges, model)
        except ValidationError as e:
            emit(error_event(str(e)))
            raise

        experiment_id: str | None = None
        try:
            experiment_id = self.store.create_experiment(
                Experiment(
                    prompt=request.prompt,
                    parameter_ranges=request.parameter_ranges,
                    model=model,
                    total_responses=len(tasks),
                )
            )
            logger.info(
                "Experiment %s created: %d combinations on %s", experiment_id, len(tasks), model
            )
            emit(started_event(experiment_id, len(tasks)))

            self.store.update_experiment(experiment_id, {"status": ExperimentStatus.PROCESSING})
            emit(processing_event(len(tasks)))

            completed, failed = self._run_tasks(experiment_id, request.prompt, tasks)
            logger.info(
                "Experiment %s generated %d responses (%d failed)", experiment_id, completed, failed
            )
            emit(responses_generated_event(completed, failed))

            summary = aggregate_responses(self.store.list_responses(experiment_id))
            self.store.update_experiment(experiment_id, {
                "status": ExperimentStatus.COMPLETED,
                "completed_responses": summary.success_count,
                "failed_responses": summary.failure_count,
                "best_response_id": summary.best_response.id if summary.best_response else None,
                "best_score": summary.best_score,
                "average_score": summary.average_score,
                "score_distribution": summary.score_distribution,
            })
            logger.info("Experiment %s completed (best score: %s)", experiment_id, summary.best_score)
            emit(complete_event(CompletePayload(
                experiment_id=experiment_id,
                completed_responses=summary.success_count,
                failed_responses=summary.failure_count,
                best_score=summary.best_score,
                average_score=summary.average_score,
                best_response=summary.best_response,
            )))

            return ExperimentRunResult(
                experiment_id=experiment_id,
                status=ExperimentStatus.COMPLETED,
                summary=summary,
            )
        except (ValidationError, NotFoundError) as e:
            emit(error_event(str(e), experiment_id))
            raise
        except Exception as e:
            logger.exception("Experiment %s failed", experiment_id or "(not created)")
            if experiment_id is not None:
                self._mark_failed(experiment_id, str(e))
            emit(error_event(str(e), experiment_id))
            raise OrchestrationError(experiment_id=experiment_id) from e

    def _run_tasks(
        self,
        experiment_id: str,
        prompt: str,
        tasks: list[GenerationTask],
    ) -> tuple[int, int]:
        """Run every task on the worker pool and wait for all of them to settle"""
        completed = 0
        failed = 0
        with ThreadPoolExecutor(max_workers=self.config.experiment.max_concurrent_calls) as executor:
            futures = {
                executor.submit(self._run_task, experiment_id, prompt, task): task
                for task in tasks
            }
            for future in as_completed(futures):
                task = futures[future]
                try:
                    succeeded = future.result()
                except Exception:
                    logger.exception(
                        "Failed to store response (temperature=%s, top_p=%s)",
                        task.temperature, task.top_p,
                    )
                    succeeded = False
                if succeeded:
                    completed += 1
                else:
                    failed += 1
        return completed, failed

    def _run_task(self, experiment_id: str, prompt: str, task: GenerationTask) -> bool:
        """
        Generate, score and persist one combination

        Returns:
            bool: True if a successful response was stored

        Raises:
            Exception: Only if persisting the response fails
        """
        try:
            result = self.model_client.generate(
                prompt,
                temperature=task.temperature,
                top_p=task.top_p,
                model=task.model,
                max_tokens=self.config.experiment.max_tokens,
            )
            metrics = calculate_metrics(prompt, result.text)
        except ProviderError as e:
            logger.warning(
                "Generation failed (temperature=%s, top_p=%s): %s",
                task.temperature, task.top_p, e,
            )
            self._store_failure(experiment_id, task, e)
            return False
        except Exception as e:
            logger.exception(
                "Unexpected error (temperature=%s, top_p=%s)", task.temperature, task.top_p
            )
            self._store_failure(experiment_id, task, e)
            return False

        self.store.add_response(experiment_id, Response(
            experiment_id=experiment_id,
            parameters=task,
            status=ResponseStatus.SUCCESS,
            response_text=result.text,
            tokens_used=result.tokens_used,
            latency_ms=result.latency_ms,
            metrics=metrics,
        ))
        return True

    def _store_failure(self, experiment_id: str, task: GenerationTask, error: Exception) -> None:
        self.store.add_response(experiment_id, Response(
            experiment_id=experiment_id,
            parameters=task,
            status=ResponseStatus.FAILED,
            error=str(error) or type(error).__name__,
        ))

    def _mark_failed(self, experiment_id: str, message: str) -> None:
        try:
            self.store.update_experiment(
                experiment_id, {"status": ExperimentStatus.FAILED, "error": message}
            )
        except Exception:
            logger.exception("Could not mark experiment %s as failed", experiment_id)


def run_experiment(
    request: ExperimentRequest,
    store: ExperimentStore,
    model_client: ModelClient,
    on_progress: ProgressCallback | None = None,
    config: SweepConfig | None = None,
) -> ExperimentRunResult:
    """Convenience wrapper around ExperimentOrchestrator.run()"""
    return ExperimentOrchestrator(store, model_client, config).run(request, on_progress)
