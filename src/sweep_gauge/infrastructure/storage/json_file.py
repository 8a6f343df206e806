"""
JSON-file experiment store

In-memory store with write-through persistence:

    {data_dir}/experiments/{experiment_id}.json
    {data_dir}/responses/{experiment_id}.json   (list, in insertion order)

Files are replaced atomically (write .tmp then rename), and all responses of
an experiment live in one file, so deleting them is a single unlink.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from sweep_gauge.domain.entities import Experiment, Response
from sweep_gauge.infrastructure.storage.memory import InMemoryExperimentStore

logger = logging.getLogger(__name__)


class JsonFileExperimentStore(InMemoryExperimentStore):
    """Experiment store persisted as JSON files under data_dir"""

    def __init__(self, data_dir: str | Path):
        super().__init__()
        self._data_dir = Path(data_dir)
        self._experiments_dir = self._data_dir / "experiments"
        self._responses_dir = self._data_dir / "responses"
        self._experiments_dir.mkdir(parents=True, exist_ok=True)
        self._responses_dir.mkdir(parents=True, exist_ok=True)
        self._load_all()

    # ------------------------------------------------------------------
    # Persistence helpers
    # ------------------------------------------------------------------

    def _load_all(self) -> None:
        """Load every experiment and response file into the cache."""
        loaded = []
        for path in self._experiments_dir.glob("*.json"):
            try:
                loaded.append(Experiment.from_dict(json.loads(path.read_text(encoding="utf-8"))))
            except (json.JSONDecodeError, KeyError, TypeError, ValueError):
                logger.warning("Failed to load experiment file %s, skipping", path)

        # Insertion order follows creation time so ties resolve as when first written
        for experiment in sorted(loaded, key=lambda e: e.created_at):
            self._experiments[experiment.id] = experiment

        for path in self._responses_dir.glob("*.json"):
            experiment_id = path.stem
            if experiment_id not in self._experiments:
                logger.warning("Responses file %s has no experiment, skipping", path)
                continue
            try:
                records = json.loads(path.read_text(encoding="utf-8"))
                self._responses[experiment_id] = [Response.from_dict(r) for r in records]
            except (json.JSONDecodeError, KeyError, TypeError, ValueError):
                logger.warning("Failed to load responses file %s, skipping", path)

        if self._experiments:
            logger.info("Loaded %d experiment(s) from %s", len(self._experiments), self._data_dir)

    @staticmethod
    def _write_json(target: Path, data) -> None:
        """Atomically replace *target* with the JSON encoding of *data*."""
        tmp = target.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp, target)

    def _persist_experiment(self, experiment: Experiment) -> None:
        self._write_json(self._experiments_dir / f"{experiment.id}.json", experiment.to_dict())

    def _persist_responses(self, experiment_id: str, responses: list[Response]) -> None:
        self._write_json(
            self._responses_dir / f"{experiment_id}.json",
            [r.to_dict() for r in responses],
        )

    def _remove_experiment(self, experiment_id: str) -> None:
        (self._experiments_dir / f"{experiment_id}.json").unlink(missing_ok=True)

    def _remove_responses(self, experiment_id: str) -> None:
        (self._responses_dir / f"{experiment_id}.json").unlink(missing_ok=True)
