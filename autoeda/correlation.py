"""
Pearson correlation between numeric columns.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
import pandas as pd

from config.analysis_configs import HIGH_CORRELATION_THRESHOLD
from autoeda.utils import parse_numbers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorrelationMatrix:
    """Square correlation matrix indexed by column name."""
    columns: Tuple[str, ...]
    values: Tuple[Tuple[float, ...], ...]

    def get(self, first, second):
        return self.values[self.columns.index(first)][self.columns.index(second)]

    def to_frame(self):
        return pd.DataFrame(
            [list(row) for row in self.values],
            index=list(self.columns),
            columns=list(self.columns)
        )


@dataclass(frozen=True)
class CorrelatedPair:
    first: str
    second: str
    correlation: float


def _sample_std(series, mean):
    if len(series) < 2:
        return 0.0
    return float(np.sqrt(np.sum((series - mean) ** 2) / (len(series) - 1)))


def _pair_correlation(xi, xj, mean_i, mean_j, std_i, std_j):
    """
    Correlation over the first min(len) positions of two series.

    Series are aligned by position in the filtered series, not by row.
    """
    if std_i == 0.0 or std_j == 0.0:
        return 0.0
    nn = min(len(xi), len(xj))
    if nn <= 1:
        return 0.0
    cov = float(np.sum((xi[:nn] - mean_i) * (xj[:nn] - mean_j))) / (nn - 1)
    return float(np.clip(cov / (std_i * std_j), -1.0, 1.0))


def correlate(table, numeric_column_names):
    """
    Pearson correlation matrix over the named columns.

    Each column contributes the numbers that parse from its cells, so
    columns with missing values give shorter series. The diagonal is 1.0;
    pairs involving a constant column are 0.0.

    Args:
        table: Parsed Table
        numeric_column_names: Columns to correlate, in display order

    Returns:
        CorrelationMatrix
    """
    names = list(numeric_column_names)
    series = [
        np.array(parse_numbers(table.column(name).values), dtype=float)
        for name in names
    ]
    means = [float(np.mean(s)) if len(s) else 0.0 for s in series]
    stds = [_sample_std(s, m) for s, m in zip(series, means)]

    k = len(names)
    matrix = np.zeros((k, k))
    for i in range(k):
        matrix[i][i] = 1.0
        for j in range(i + 1, k):
            r = _pair_correlation(series[i], series[j], means[i], means[j], stds[i], stds[j])
            matrix[i][j] = r
            matrix[j][i] = r

    logger.debug("Computed %dx%d correlation matrix", k, k)
    return CorrelationMatrix(
        columns=tuple(names),
        values=tuple(tuple(float(v) for v in row) for row in matrix)
    )


def high_correlation_pairs(matrix, threshold=HIGH_CORRELATION_THRESHOLD):
    """Column pairs with |r| above threshold, strongest first."""
    pairs: List[CorrelatedPair] = []
    k = len(matrix.columns)
    for i in range(k):
        for j in range(i + 1, k):
            value = matrix.values[i][j]
            if abs(value) > threshold:
                pairs.append(CorrelatedPair(matrix.columns[i], matrix.columns[j], value))

    return sorted(pairs, key=lambda p: abs(p.correlation), reverse=True)
