"""
In-memory experiment store

Thread-safe: every operation holds a single lock, so worker threads can
append responses concurrently.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import replace
from typing import Any

from sweep_gauge.domain.entities import Experiment, Response, utc_now
from sweep_gauge.domain.exceptions import NotFoundError, ValidationError
from sweep_gauge.infrastructure.storage.base import ExperimentPage, ExperimentStore

logger = logging.getLogger(__name__)


class InMemoryExperimentStore(ExperimentStore):
    """Experiment store backed by dictionaries"""

    def __init__(self):
        self._experiments: dict[str, Experiment] = {}
        self._responses: dict[str, list[Response]] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Write-through hooks (no-op in memory)
    # ------------------------------------------------------------------

    def _persist_experiment(self, experiment: Experiment) -> None:
        pass

    def _persist_responses(self, experiment_id: str, responses: list[Response]) -> None:
        pass

    def _remove_experiment(self, experiment_id: str) -> None:
        pass

    def _remove_responses(self, experiment_id: str) -> None:
        pass

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create_experiment(self, experiment: Experiment) -> str:
        experiment_id = uuid.uuid4().hex
        stored = replace(experiment, id=experiment_id)
        with self._lock:
            self._persist_experiment(stored)
            self._experiments[experiment_id] = stored
        logger.debug("Created experiment: %s", experiment_id)
        return experiment_id

    def update_experiment(self, experiment_id: str, changes: dict[str, Any]) -> None:
        changes = {k: v for k, v in changes.items() if k not in ("id", "created_at", "updated_at")}
        with self._lock:
            current = self._experiments.get(experiment_id)
            if current is None:
                raise NotFoundError(experiment_id)
            if "status" in changes and current.status.is_terminal:
                raise ValidationError(
                    f"Experiment {experiment_id} is already {current.status.value}"
                )
            updated = replace(current, **changes, updated_at=utc_now())
            self._persist_experiment(updated)
            self._experiments[experiment_id] = updated
        logger.debug("Updated experiment: %s (%s)", experiment_id, ", ".join(changes))

    def get_experiment(self, experiment_id: str) -> Experiment | None:
        with self._lock:
            experiment = self._experiments.get(experiment_id)
            return replace(experiment) if experiment else None

    def list_experiments(self, limit: int = 20, cursor: str | None = None) -> ExperimentPage:
        if limit < 1:
            raise ValidationError("limit must be at least 1")

        with self._lock:
            # Reversed insertion order + stable sort: newer wins creation-time ties
            ordered = sorted(
                reversed(list(self._experiments.values())),
                key=lambda e: e.created_at,
                reverse=True,
            )
            ordered = [replace(e) for e in ordered]

        start = 0
        if cursor is not None:
            ids = [e.id for e in ordered]
            if cursor not in ids:
                raise ValidationError(f"Invalid cursor: {cursor}")
            start = ids.index(cursor) + 1

        page = ordered[start:start + limit]
        has_more = len(ordered) > start + limit
        return ExperimentPage(
            experiments=page,
            has_more=has_more,
            next_cursor=page[-1].id if has_more and page else None,
        )

    def add_response(self, experiment_id: str, response: Response) -> str:
        response_id = uuid.uuid4().hex
        stored = replace(response, id=response_id, experiment_id=experiment_id)
        with self._lock:
            if experiment_id not in self._experiments:
                raise NotFoundError(experiment_id)
            responses = self._responses.get(experiment_id, []) + [stored]
            self._persist_responses(experiment_id, responses)
            self._responses[experiment_id] = responses
        logger.debug("Created response %s for experiment %s", response_id, experiment_id)
        return response_id

    def list_responses(self, experiment_id: str) -> list[Response]:
        with self._lock:
            return list(self._responses.get(experiment_id, []))

    def delete_all_responses(self, experiment_id: str) -> None:
        with self._lock:
            self._remove_responses(experiment_id)
            self._responses.pop(experiment_id, None)
        logger.debug("Deleted all responses for experiment %s", experiment_id)

    def delete_experiment(self, experiment_id: str) -> None:
        with self._lock:
            self._remove_experiment(experiment_id)
            self._experiments.pop(experiment_id, None)
        logger.debug("Deleted experiment: %s", experiment_id)
