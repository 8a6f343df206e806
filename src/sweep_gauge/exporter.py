"""
Experiment Export

Serializes an experiment's full result set as JSON or CSV.
"""

from __future__ import annotations

import json

import pandas as pd

from sweep_gauge.domain.exceptions import ValidationError
from sweep_gauge.domain.reports import ExperimentDetail

EXPORT_FORMATS = ("json", "csv")

CSV_COLUMNS = [
    "Response ID",
    "Temperature",
    "Top-P",
    "Overall Score",
    "Coherence Score",
    "Relevancy Score",
    "Completeness Score",
    "Repetition Score",
    "Length Score",
    "Word Count",
    "Latency (ms)",
]


def to_json(detail: ExperimentDetail) -> str:
    """Experiment, responses and best response as an indented JSON document"""
    return json.dumps(detail.to_dict(), ensure_ascii=False, indent=2)


def to_csv(detail: ExperimentDetail) -> str:
    """
    One CSV row per response, in storage order

    Failed responses have empty metric cells.
    """
    rows = []
    for r in detail.responses:
        m = r.metrics
        rows.append({
            "Response ID": r.id,
            "Temperature": r.parameters.temperature,
            "Top-P": r.parameters.top_p,
            "Overall Score": m.overall_score if m else None,
            "Coherence Score": m.coherence_score if m else None,
            "Relevancy Score": m.relevancy_score if m else None,
            "Completeness Score": m.completeness_score if m else None,
            "Repetition Score": m.repetition_score if m else None,
            "Length Score": m.length_score if m else None,
            "Word Count": m.details.word_count if m else None,
            "Latency (ms)": r.latency_ms,
        })

    df = pd.DataFrame(rows, columns=CSV_COLUMNS)
    # Keep word counts integral when some rows are empty
    df["Word Count"] = df["Word Count"].astype("Int64")
    # Rows are newline-joined, no trailing newline
    return df.to_csv(index=False, na_rep="", lineterminator="\n").removesuffix("\n")


def export_filename(experiment_id: str, format: str = "json") -> str:
    return f"experiment-{experiment_id}.{format}"


def export(detail: ExperimentDetail, format: str = "json") -> str:
    """
    Serialize an experiment in the requested format

    Args:
        detail: Experiment with its responses
        format: "json" (default) or "csv"

    Returns:
        str: Serialized document

    Raises:
        ValidationError: If the format is not supported
    """
    if format == "json":
        return to_json(detail)
    if format == "csv":
        return to_csv(detail)
    raise ValidationError(f"Unsupported export format: {format} (available: {list(EXPORT_FORMATS)})")
