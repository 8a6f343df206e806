"""
Experiment storage package

Provides the store interface and its in-memory and JSON-file implementations.
"""

from __future__ import annotations

from sweep_gauge.sweep_config import SweepConfig, load_config
from sweep_gauge.infrastructure.storage.base import ExperimentPage, ExperimentStore
from sweep_gauge.infrastructure.storage.json_file import JsonFileExperimentStore
from sweep_gauge.infrastructure.storage.memory import InMemoryExperimentStore


def create_store(config: SweepConfig | None = None) -> ExperimentStore:
    """
    Create the store selected by the storage configuration

    Args:
        config: SweepConfig (loads from env if not provided)

    Returns:
        ExperimentStore
    """
    if config is None:
        config = load_config()
    if config.storage.backend == "memory":
        return InMemoryExperimentStore()
    return JsonFileExperimentStore(config.storage.data_dir)


__all__ = [
    "ExperimentPage",
    "ExperimentStore",
    "InMemoryExperimentStore",
    "JsonFileExperimentStore",
    "create_store",
]
