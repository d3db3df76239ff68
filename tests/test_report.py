"""Tests for the full report and its exports."""

import json

import pytest

from config.analysis_configs import AnalysisConfig
from autoeda.baseline import InsufficientData, NoUsableFeatures
from autoeda.csv_table import parse
from autoeda.report import (
    _baseline_markdown, generate_markdown_report, generate_report, report_to_dict
)


class TestGenerateReport:
    """Tests for generate_report()."""

    def test_default_config(self, mixed_table):
        report = generate_report(mixed_table)

        assert report.overview.n_rows == 30
        assert report.histogram is None
        assert report.baseline.status.value == "no_target"
        assert report.correlation.columns == ("id", "score")
        assert list(report.summaries) == ["id", "score"]

    def test_with_target_and_histogram(self, mixed_table):
        config = AnalysisConfig(target_column="city", histogram_column="score", bin_percent=0.2)
        report = generate_report(mixed_table, config, file_size=2048)

        assert report.baseline.status.value == "classification"
        assert report.histogram.column == "score"
        assert report.histogram.is_numeric
        assert report.overview.file_size == 2048

    def test_unknown_histogram_column(self, mixed_table):
        with pytest.raises(KeyError):
            generate_report(mixed_table, AnalysisConfig(histogram_column="nope"))


class TestExports:
    """Tests for Markdown and JSON output."""

    def test_markdown_sections(self, mixed_table):
        config = AnalysisConfig(target_column="score", histogram_column="city")
        md = generate_markdown_report(generate_report(mixed_table, config), "data.csv")

        assert md.startswith("# AutoEDA Report")
        assert "**Dataset:** data.csv" in md
        assert "## Numeric Summary" in md
        assert "## Histogram: city" in md
        assert "| RMSE |" in md

    def test_markdown_confusion_matrix(self, separable_table):
        md = generate_markdown_report(
            generate_report(separable_table, AnalysisConfig(target_column="label"))
        )

        assert "**Dataset:** Unknown Dataset" in md
        assert "| **a** | 3 | 0 |" in md
        assert "| **b** | 0 | 3 |" in md

    def test_markdown_single_numeric_column(self, small_table):
        md = generate_markdown_report(generate_report(small_table))
        assert "Need at least 2 numeric columns" in md

    def test_markdown_other_baselines(self):
        assert "no numeric features" in _baseline_markdown(NoUsableFeatures("t")).lower()
        assert "rows used: 1" in _baseline_markdown(InsufficientData("t", 1))

    def test_markdown_unknown_baseline(self):
        with pytest.raises(TypeError):
            _baseline_markdown(object())

    def test_json_roundtrip_shape(self, separable_table):
        report = generate_report(separable_table, AnalysisConfig(target_column="label"))
        data = json.loads(json.dumps(report_to_dict(report)))

        assert data["baseline"]["status"] == "classification"
        assert data["baseline"]["confusion_matrix"] == [[3, 0], [0, 3]]
        assert data["profiles"][0]["kind"] == "numeric"
        assert data["config"]["target_column"] == "label"

    def test_empty_table(self):
        report = generate_report(parse(""))
        md = generate_markdown_report(report)

        assert report.overview.n_columns == 0
        assert "## Dataset Overview" in md
