"""
sweep-gauge Experiment Viewer

Minimal Streamlit dashboard for browsing stored experiments.
Displays the score summary, histogram, per-parameter scores and responses.

Usage:
    pip install -e ".[viewer]"
    streamlit run src/sweep_gauge/viewer.py
    streamlit run src/sweep_gauge/viewer.py -- --data-dir data

Requires the package to be installed (e.g. via ``pip install -e .``).
"""

from __future__ import annotations

import argparse

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from sweep_gauge.domain.reports import ExperimentDetail, ExperimentMetricsReport
from sweep_gauge.infrastructure.storage import JsonFileExperimentStore
from sweep_gauge.sweep_config import load_config
from sweep_gauge.use_cases.queries import ExperimentQueries

# -- Colors --
PRIMARY_COLOR = "#1a73e8"
SECONDARY_COLOR = "#e8710a"

SCORE_COLUMNS = {
    "overall_score": "Overall",
    "coherence_score": "Coherence",
    "relevancy_score": "Relevancy",
    "completeness_score": "Completeness",
    "repetition_score": "Repetition",
    "length_score": "Length",
}


def _responses_frame(detail: ExperimentDetail) -> pd.DataFrame:
    """One row per response with parameters and sub-scores."""
    rows = []
    for r in detail.responses:
        row = {
            "temperature": r.parameters.temperature,
            "top_p": r.parameters.top_p,
            "status": r.status.value,
            "latency_ms": r.latency_ms,
            "tokens_used": r.tokens_used,
            "response": r.response_text or r.error or "",
        }
        for key in SCORE_COLUMNS:
            row[key] = getattr(r.metrics, key) if r.metrics else None
        row["word_count"] = r.metrics.details.word_count if r.metrics else None
        rows.append(row)
    return pd.DataFrame(rows)


def _render_summary(detail: ExperimentDetail, report: ExperimentMetricsReport) -> None:
    experiment = detail.experiment
    st.header("Summary")
    st.markdown(f"**Prompt**: {experiment.prompt}")
    st.caption(f"Model: `{experiment.model}` | Status: {experiment.status.value}")
    if experiment.error:
        st.error(experiment.error)

    cols = st.columns(4)
    cols[0].metric("Responses", f"{experiment.completed_responses}/{experiment.total_responses}")
    cols[1].metric("Average score", f"{report.average_score:.3f}")
    cols[2].metric("Best score", f"{report.best_score:.3f}")
    cols[3].metric("Worst score", f"{report.worst_score:.3f}")

    if detail.best_response is not None:
        best = detail.best_response
        st.subheader(
            f"Best response (temperature={best.parameters.temperature}, "
            f"top_p={best.parameters.top_p})"
        )
        st.write(best.response_text)


def _render_histogram(report: ExperimentMetricsReport) -> None:
    st.header("Score Distribution")
    bins = len(report.score_histogram)
    labels = [f"{i / bins:.1f}-{(i + 1) / bins:.1f}" for i in range(bins)]

    fig = go.Figure(go.Bar(x=labels, y=report.score_histogram, marker_color=PRIMARY_COLOR))
    fig.update_layout(
        xaxis_title="Overall score",
        yaxis_title="Responses",
        template="plotly_white",
        height=350,
    )
    st.plotly_chart(fig, use_container_width=True)


def _render_breakdown(report: ExperimentMetricsReport) -> None:
    """Mean score per temperature and per top-p value."""
    st.header("Score by Parameter")
    left, right = st.columns(2)

    for column, title, values, color in (
        (left, "Temperature", report.metric_breakdown.by_temperature, PRIMARY_COLOR),
        (right, "Top-P", report.metric_breakdown.by_top_p, SECONDARY_COLOR),
    ):
        fig = go.Figure(go.Bar(x=list(values), y=list(values.values()), marker_color=color))
        fig.update_layout(
            title=f"Mean score by {title}",
            xaxis_title=title,
            xaxis_type="category",
            yaxis_title="Mean overall score",
            yaxis_range=[0, 1.05],
            template="plotly_white",
            height=350,
        )
        column.plotly_chart(fig, use_container_width=True)


def _render_heatmap(df: pd.DataFrame) -> None:
    """Overall score over the temperature x top-p grid."""
    scored = df.dropna(subset=["overall_score"])
    if scored.empty:
        return
    grid = scored.pivot_table(index="temperature", columns="top_p", values="overall_score", aggfunc="mean")

    fig = go.Figure(go.Heatmap(
        z=grid.values,
        x=[str(c) for c in grid.columns],
        y=[str(i) for i in grid.index],
        colorscale="Blues",
        zmin=0,
        zmax=1,
        colorbar=dict(title="Score"),
    ))
    fig.update_layout(
        title="Overall score grid",
        xaxis_title="Top-P",
        yaxis_title="Temperature",
        template="plotly_white",
        height=400,
    )
    st.plotly_chart(fig, use_container_width=True)


def _render_responses(df: pd.DataFrame) -> None:
    st.header("Responses")
    table = df.rename(columns={
        "temperature": "Temperature",
        "top_p": "Top-P",
        "status": "Status",
        "latency_ms": "Latency (ms)",
        "tokens_used": "Tokens",
        "word_count": "Words",
        "response": "Response",
        **SCORE_COLUMNS,
    })
    st.dataframe(table, use_container_width=True, hide_index=True)


def main() -> None:
    # Parse --data-dir from Streamlit args (after --)
    parser = argparse.ArgumentParser()
    parser.add_argument("--data-dir", default=None)
    args, _ = parser.parse_known_args()

    data_dir = args.data_dir or load_config().storage.data_dir

    st.set_page_config(page_title="sweep-gauge", layout="wide")
    st.title("sweep-gauge Experiments")

    queries = ExperimentQueries(JsonFileExperimentStore(data_dir))
    page = queries.list_experiments(limit=100)
    if not page.items:
        st.warning(f"No experiments found in `{data_dir}/`")
        st.info(
            "Run an experiment first:\n```\npython -m sweep_gauge.runner run "
            "--prompt \"Explain quantum computing\" --temperatures 0.3,0.7,1.0 --top-p 0.9,1.0\n```"
        )
        return

    # Experiment selector
    labels = {
        item.id: f"{item.created_at:%Y-%m-%d %H:%M} | {item.prompt[:50]}"
        for item in page.items
    }
    selected_id = st.sidebar.selectbox(
        "Experiment",
        options=list(labels),
        format_func=labels.get,
        index=0,
    )

    detail = queries.get_experiment(selected_id)
    report = queries.get_experiment_metrics(selected_id)
    df = _responses_frame(detail)

    # Sidebar info
    st.sidebar.markdown("---")
    st.sidebar.markdown(f"**Temperatures**: {list(detail.experiment.parameter_ranges.temperatures)}")
    st.sidebar.markdown(f"**Top-P**: {list(detail.experiment.parameter_ranges.top_p)}")
    st.sidebar.markdown(f"**Failed responses**: {detail.experiment.failed_responses}")

    # Render sections
    _render_summary(detail, report)
    _render_histogram(report)
    _render_breakdown(report)
    _render_heatmap(df)
    _render_responses(df)


if __name__ == "__main__":
    main()
