"""
Descriptive statistics for numeric columns.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from autoeda.profiler import ColumnKind
from autoeda.utils import format_percentage, parse_numbers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NumericSummary:
    """Mean, spread and range of a numeric column."""
    name: str
    count: int
    mean: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]


def summarize_column(name, values):
    """
    Summarize the parseable numbers among a column's cells.

    The standard deviation uses the sample (n-1) denominator and is None
    when fewer than two numbers are present.
    """
    numbers = np.array(parse_numbers(values), dtype=float)
    count = len(numbers)

    if count == 0:
        return NumericSummary(name, 0, None, None, None, None)

    std = float(np.std(numbers, ddof=1)) if count >= 2 else None

    return NumericSummary(
        name=name,
        count=count,
        mean=float(np.mean(numbers)),
        std=std,
        min=float(np.min(numbers)),
        max=float(np.max(numbers))
    )


def describe(table, profiles):
    """
    Summaries for every numeric column.

    Returns:
        Dict mapping column name -> NumericSummary, in header order
    """
    summaries = {}
    for p in profiles:
        if p.kind is ColumnKind.NUMERIC:
            summaries[p.name] = summarize_column(p.name, table.column(p.name).values)
        elif p.kind in (ColumnKind.CATEGORICAL, ColumnKind.TEXT):
            continue
        else:
            raise ValueError(f"Unhandled column kind: {p.kind}")

    logger.debug("Described %d numeric columns", len(summaries))
    return summaries


def summaries_to_dataframe(summaries, profiles=None):
    """
    Tabulate summaries for display.

    With profiles, a 'Missing %' column is added. A repeated column name
    takes the first profile of that name, matching the summary it got.
    """
    rows = [
        {
            'Column': s.name,
            'Count': s.count,
            'Mean': s.mean,
            'Std': s.std,
            'Min': s.min,
            'Max': s.max
        }
        for s in summaries.values()
    ]
    df = pd.DataFrame(rows, columns=['Column', 'Count', 'Mean', 'Std', 'Min', 'Max'])

    if profiles is not None:
        by_name = {}
        for p in profiles:
            by_name.setdefault(p.name, p)
        df['Missing %'] = [format_percentage(by_name[name].missing_ratio) for name in summaries]

    return df
