"""
Full analysis pass and report export (Markdown and JSON).
"""

import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from config.analysis_configs import AnalysisConfig, BASELINE_DESCRIPTIONS
from autoeda.baseline import (
    ClassificationBaseline, InsufficientData, NoTarget, NoUsableFeatures,
    RegressionBaseline, evaluate_baseline
)
from autoeda.correlation import (
    CorrelatedPair, CorrelationMatrix, correlate, high_correlation_pairs
)
from autoeda.histogram import HistogramResult, histogram
from autoeda.profiler import (
    ColumnProfile, DatasetOverview, MissingValueEntry, dataset_overview,
    missing_values, numeric_column_names, profile
)
from autoeda.stats import NumericSummary, describe
from autoeda.utils import format_bytes, format_number, format_percentage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdaReport:
    """Everything computed for one dataset and one AnalysisConfig."""
    config: AnalysisConfig
    overview: DatasetOverview
    profiles: List[ColumnProfile]
    summaries: Dict[str, NumericSummary]
    missing: List[MissingValueEntry]
    correlation: CorrelationMatrix
    high_correlations: List[CorrelatedPair]
    histogram: Optional[HistogramResult]
    baseline: object


def generate_report(table, config=None, file_size=None):
    """
    Run every analysis on the table.

    The histogram is computed only when config.histogram_column is set; the
    baseline always runs and reports NoTarget when no target is set.
    """
    config = config or AnalysisConfig()

    profiles = profile(table)
    matrix = correlate(table, numeric_column_names(profiles))

    hist = None
    if config.histogram_column:
        hist = histogram(table, config.histogram_column, config.bin_percent)

    report = EdaReport(
        config=config,
        overview=dataset_overview(table, profiles, file_size),
        profiles=profiles,
        summaries=describe(table, profiles),
        missing=missing_values(profiles),
        correlation=matrix,
        high_correlations=high_correlation_pairs(matrix),
        histogram=hist,
        baseline=evaluate_baseline(table, config.target_column, config.k_neighbors)
    )
    logger.info(
        "Report generated: %d rows, %d columns, baseline %s",
        table.n_rows, table.n_columns, report.baseline.status.value
    )
    return report


# ============================================================================
# Markdown
# ============================================================================


def _baseline_markdown(baseline):
    if isinstance(baseline, NoTarget):
        return f"{BASELINE_DESCRIPTIONS['no_target']}\n"

    if isinstance(baseline, RegressionBaseline):
        return f"""**Target:** {baseline.target} (numeric)
{BASELINE_DESCRIPTIONS['regression']}

| Metric | Value |
|--------|-------|
| RMSE | {baseline.rmse:.3f} |
| MAE | {baseline.mae:.3f} |
| R² | {baseline.r2:.3f} |
| Target mean | {baseline.target_mean:.3f} |
| Rows used | {baseline.rows_used} |
"""

    if isinstance(baseline, ClassificationBaseline):
        md = f"""**Target:** {baseline.target} (categorical)
{BASELINE_DESCRIPTIONS['classification']}

| Metric | Value |
|--------|-------|
| Accuracy | {format_percentage(baseline.accuracy)} |
| Macro F1 | {baseline.macro_f1:.3f} |
| Rows used | {baseline.rows_used} |
| Features | {baseline.feature_count} |

### Per-Class Scores

| Class | Count | Share | Precision | Recall | F1 |
|-------|-------|-------|-----------|--------|----|
"""
        for i, share in enumerate(baseline.class_distribution):
            md += (f"| {share.label} | {share.count} | {format_percentage(share.ratio)} | "
                   f"{baseline.precision[i]:.3f} | {baseline.recall[i]:.3f} | {baseline.f1[i]:.3f} |\n")

        md += "\n### Confusion Matrix (rows: actual, columns: predicted)\n\n"
        md += "| | " + " | ".join(baseline.classes) + " |\n"
        md += "|---|" + "---|" * len(baseline.classes) + "\n"
        for label, row in zip(baseline.classes, baseline.confusion_matrix):
            md += f"| **{label}** | " + " | ".join(str(v) for v in row) + " |\n"
        return md

    if isinstance(baseline, NoUsableFeatures):
        return f"**Target:** {baseline.target}  \n{BASELINE_DESCRIPTIONS['no_usable_features']}\n"

    if isinstance(baseline, InsufficientData):
        return (f"**Target:** {baseline.target}  \n{BASELINE_DESCRIPTIONS['insufficient_data']} "
                f"(rows used: {baseline.rows_used})\n")

    raise TypeError(f"Unknown baseline result: {type(baseline).__name__}")


def generate_markdown_report(report, file_name=None):
    """Generate a Markdown report."""
    overview = report.overview
    file_name = file_name or 'Unknown Dataset'

    md = f"""# AutoEDA Report

**Dataset:** {file_name}
**Generated:** {datetime.now().strftime("%B %d, %Y at %H:%M")}

---

## Dataset Overview

| Rows | Columns | Numeric | Categorical | Text | Missing | File Size |
|------|---------|---------|-------------|------|---------|-----------|
| {overview.n_rows} | {overview.n_columns} | {overview.numeric_count} | {overview.categorical_count} | {overview.text_count} | {format_percentage(overview.missing_ratio)} | {format_bytes(overview.file_size) if overview.file_size is not None else '-'} |

## Columns

| Column | Kind | Missing % | Unique |
|--------|------|-----------|--------|
"""
    for p in report.profiles:
        md += f"| {p.name} | {p.kind.value} | {format_percentage(p.missing_ratio)} | {p.unique_count} |\n"

    md += """
## Numeric Summary

| Column | Mean | Std | Min | Max |
|--------|------|-----|-----|-----|
"""
    for s in report.summaries.values():
        md += f"| {s.name} | {format_number(s.mean)} | {format_number(s.std)} | {format_number(s.min)} | {format_number(s.max)} |\n"

    md += "\n## Correlations\n\n"
    if len(report.correlation.columns) < 2:
        md += "Need at least 2 numeric columns for correlation analysis.\n"
    elif report.high_correlations:
        md += "| Feature 1 | Feature 2 | Correlation |\n|-----------|-----------|-------------|\n"
        for pair in report.high_correlations:
            md += f"| {pair.first} | {pair.second} | {pair.correlation:.3f} |\n"
    else:
        md += "No highly correlated column pairs found.\n"

    if report.histogram is not None:
        hist = report.histogram
        first_header = 'Range' if hist.is_numeric else 'Value'
        md += f"\n## Histogram: {hist.column}\n\n| {first_header} | Count | Ratio |\n|---|---|---|\n"
        for b in hist.bins:
            md += f"| {b.label} | {b.count} | {format_percentage(b.ratio, 0)} |\n"

    md += "\n## Baseline Model\n\n"
    md += _baseline_markdown(report.baseline)

    md += """
---

*Generated by AutoEDA*
"""
    return md


# ============================================================================
# JSON
# ============================================================================


def _jsonable(value):
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def report_to_dict(report):
    """Plain dict of the report, ready for json.dumps."""
    return _jsonable(report)
