"""
Column type detection and data quality profiling.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config.analysis_configs import (
    NUMERIC_RATIO_THRESHOLD, CATEGORICAL_MIN_UNIQUE, CATEGORICAL_UNIQUE_RATIO
)
from autoeda.utils import is_missing, parse_numbers, round_half_up

logger = logging.getLogger(__name__)


class ColumnKind(Enum):
    """Kind of values a column holds."""
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    TEXT = "text"


@dataclass(frozen=True)
class ColumnProfile:
    """Type and missingness of a single column."""
    name: str
    kind: ColumnKind
    missing_ratio: float
    missing_count: int
    numeric_count: int
    unique_count: int

    @property
    def is_numeric(self):
        return self.kind is ColumnKind.NUMERIC


@dataclass(frozen=True)
class MissingValueEntry:
    """Missing cells of one column."""
    name: str
    missing_count: int
    missing_ratio: float


@dataclass(frozen=True)
class DatasetOverview:
    """Headline numbers for a loaded dataset."""
    n_rows: int
    n_columns: int
    numeric_count: int
    categorical_count: int
    text_count: int
    missing_ratio: float
    file_size: Optional[int] = None


def is_numeric_column(numeric_count, n_rows, threshold=NUMERIC_RATIO_THRESHOLD):
    """
    Numeric rule used for column profiling.

    Unlike is_mostly_numeric (histograms, baselines), the ratio here is
    measured against every row, so missing cells count against the column.
    """
    return numeric_count > 0 and numeric_count >= n_rows * threshold


def categorical_limit(n_rows):
    """Largest number of distinct values a categorical column may have."""
    return max(CATEGORICAL_MIN_UNIQUE, round_half_up(n_rows * CATEGORICAL_UNIQUE_RATIO))


def profile_column(column, n_rows):
    """
    Classify one column and measure its missing values.

    Args:
        column: Column view from the table
        n_rows: Row count of the table, already coerced to at least 1

    Returns:
        ColumnProfile
    """
    non_missing = [v.strip() for v in column.values if not is_missing(v)]
    missing_count = len(column.values) - len(non_missing)
    numeric_count = len(parse_numbers(non_missing))
    unique_count = len(set(non_missing))

    if is_numeric_column(numeric_count, n_rows):
        kind = ColumnKind.NUMERIC
    elif unique_count <= categorical_limit(n_rows):
        kind = ColumnKind.CATEGORICAL
    else:
        kind = ColumnKind.TEXT

    return ColumnProfile(
        name=column.name,
        kind=kind,
        missing_ratio=missing_count / n_rows,
        missing_count=missing_count,
        numeric_count=numeric_count,
        unique_count=unique_count
    )


def profile(table):
    """Profile every column of the table, in header order."""
    n_rows = max(table.n_rows, 1)
    profiles = [profile_column(column, n_rows) for column in table.columns()]
    logger.debug("Profiled %d columns over %d rows", len(profiles), table.n_rows)
    return profiles


def numeric_column_names(profiles):
    return [p.name for p in profiles if p.kind is ColumnKind.NUMERIC]


def count_kinds(profiles):
    """Number of columns of each kind."""
    counts = {kind: 0 for kind in ColumnKind}
    for p in profiles:
        counts[p.kind] += 1
    return counts


def missing_values(profiles):
    """Missing value entries, highest ratio first."""
    entries = [
        MissingValueEntry(p.name, p.missing_count, p.missing_ratio)
        for p in profiles
    ]
    return sorted(entries, key=lambda e: e.missing_ratio, reverse=True)


def dataset_overview(table, profiles, file_size=None):
    """Summarize table dimensions and column kinds."""
    counts = count_kinds(profiles)
    total_cells = table.n_rows * table.n_columns
    total_missing = sum(p.missing_count for p in profiles)

    return DatasetOverview(
        n_rows=table.n_rows,
        n_columns=table.n_columns,
        numeric_count=counts[ColumnKind.NUMERIC],
        categorical_count=counts[ColumnKind.CATEGORICAL],
        text_count=counts[ColumnKind.TEXT],
        missing_ratio=total_missing / total_cells if total_cells else 0.0,
        file_size=file_size
    )
