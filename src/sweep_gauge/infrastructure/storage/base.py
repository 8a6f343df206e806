"""
Experiment store interface

A document store holding experiments and, per experiment, an ordered
collection of responses.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from sweep_gauge.domain.entities import Experiment, Response


@dataclass(frozen=True)
class ExperimentPage:
    """One page of experiments, newest first"""
    experiments: list[Experiment]
    has_more: bool
    next_cursor: str | None


class ExperimentStore(ABC):
    """Abstract base class for experiment stores

    Implementations must accept concurrent add_response() calls from worker
    threads, and delete_all_responses() must remove either every response of
    the experiment or none of them.
    """

    @abstractmethod
    def create_experiment(self, experiment: Experiment) -> str:
        """Persist a new experiment and return its id"""

    @abstractmethod
    def update_experiment(self, experiment_id: str, changes: dict[str, Any]) -> None:
        """
        Apply a partial update and refresh updated_at

        Raises:
            NotFoundError: If the experiment does not exist
            ValidationError: If the status of a completed or failed experiment is changed
        """

    @abstractmethod
    def get_experiment(self, experiment_id: str) -> Experiment | None:
        """Return the experiment, or None if it does not exist"""

    @abstractmethod
    def list_experiments(self, limit: int = 20, cursor: str | None = None) -> ExperimentPage:
        """
        List experiments by creation time, newest first

        Args:
            limit: Maximum number of experiments in the page
            cursor: Id of the last experiment of the previous page

        Raises:
            ValidationError: If the cursor does not name a stored experiment
        """

    @abstractmethod
    def add_response(self, experiment_id: str, response: Response) -> str:
        """Append a response to the experiment and return its id"""

    @abstractmethod
    def list_responses(self, experiment_id: str) -> list[Response]:
        """Return the experiment's responses in the order they were added"""

    @abstractmethod
    def delete_all_responses(self, experiment_id: str) -> None:
        """Delete every response of the experiment in one operation"""

    @abstractmethod
    def delete_experiment(self, experiment_id: str) -> None:
        """Delete the experiment document"""
