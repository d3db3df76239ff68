"""Smoke tests for the Plotly figure builders."""

from autoeda.baseline import evaluate_baseline
from autoeda.charts import (
    plot_class_distribution, plot_confusion_matrix, plot_correlation_heatmap,
    plot_histogram, plot_missing_values
)
from autoeda.correlation import correlate
from autoeda.histogram import histogram
from autoeda.profiler import missing_values, profile


def test_plot_histogram(small_table):
    fig = plot_histogram(histogram(small_table, "b"))
    assert list(fig.data[0].x) == ["x", "y"]
    assert list(fig.data[0].y) == [2, 1]


def test_plot_correlation_heatmap(mixed_table):
    fig = plot_correlation_heatmap(correlate(mixed_table, ["id", "score"]))
    assert fig.layout.title.text == "Correlation Matrix"


def test_plot_missing_values(mixed_table):
    fig = plot_missing_values(missing_values(profile(mixed_table)))
    assert len(fig.data) == 1


def test_baseline_charts(separable_table):
    result = evaluate_baseline(separable_table, "label")

    fig = plot_confusion_matrix(result, "Confusion Matrix - label")
    assert fig.layout.title.text == "Confusion Matrix - label"

    fig = plot_class_distribution(result)
    assert len(fig.data) == 2
