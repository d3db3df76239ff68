"""
Value and bin frequency histograms for a single column.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Optional, Tuple

from config.analysis_configs import DEFAULT_BIN_PERCENT, MIN_BIN_WIDTH
from autoeda.utils import is_mostly_numeric, parse_numbers

logger = logging.getLogger(__name__)

NUMERIC = "numeric"
CATEGORICAL = "categorical"


@dataclass(frozen=True)
class HistogramBin:
    label: str
    count: int
    ratio: float
    lower: Optional[float] = None
    upper: Optional[float] = None


@dataclass(frozen=True)
class HistogramResult:
    """Bins of one column; ratio = count / total."""
    column: str
    kind: str
    total: int
    bins: Tuple[HistogramBin, ...]
    bin_width: Optional[float] = None

    @property
    def is_numeric(self):
        return self.kind == NUMERIC


def format_bin_percent(bin_percent):
    return f"{bin_percent * 100:.0f}%"


def parse_bin_percent(text, default=DEFAULT_BIN_PERCENT):
    """Turn a menu choice such as '10%' into a fraction."""
    if text is None or not str(text).strip():
        return default
    try:
        return float(str(text).replace("%", "").strip()) / 100.0
    except ValueError:
        return default


def categorical_histogram(name, values):
    """Count each distinct value; most frequent first, ties in order of appearance."""
    total = max(len(values), 1)
    bins = tuple(
        HistogramBin(label=value, count=count, ratio=count / total)
        for value, count in Counter(values).most_common()
    )
    return HistogramResult(column=name, kind=CATEGORICAL, total=len(values), bins=bins)


def numeric_histogram(name, numbers, bin_percent):
    """
    Equal-width bins spanning [min, max].

    The bin width is bin_percent of the value range (floored at a tiny
    positive width for constant columns). The maximum value falls into the
    last bin.
    """
    if not numbers:
        return HistogramResult(column=name, kind=NUMERIC, total=0, bins=(), bin_width=None)

    min_val = min(numbers)
    max_val = max(numbers)
    value_range = max_val - min_val

    # max - min overflows for values near the float limits; work in scaled units
    wide = not math.isfinite(value_range)
    if wide:
        bin_width = max_val * bin_percent - min_val * bin_percent
        num_bins = math.ceil(1 / bin_percent) if math.isfinite(bin_width) else 1
    else:
        bin_width = max(value_range * bin_percent, MIN_BIN_WIDTH)
        num_bins = max(1, math.ceil(value_range / bin_width))

    counts = [0] * num_bins
    for v in numbers:
        if num_bins == 1:
            index = 0
        elif wide:
            index = int(math.floor(v / bin_width - min_val / bin_width))
        else:
            index = int(math.floor((v - min_val) / bin_width))
        counts[min(max(index, 0), num_bins - 1)] += 1

    total = len(numbers)
    bins = []
    for i, count in enumerate(counts):
        if wide and num_bins == 1:
            start, end = min_val, max_val
        elif wide:
            half = i * bin_width / 2
            start = min_val + half + half
            end = start + bin_width
        else:
            start = min_val + i * bin_width
            end = start + bin_width
        bins.append(HistogramBin(
            label=f"{start:.2f} ~ {end:.2f}",
            count=count,
            ratio=count / total,
            lower=start,
            upper=end
        ))

    if not math.isfinite(bin_width):
        bin_width = None
    return HistogramResult(column=name, kind=NUMERIC, total=total, bins=tuple(bins), bin_width=bin_width)


def histogram(table, column_name, bin_percent=None):
    """
    Histogram of one column.

    Columns whose non-missing values are at least half numeric get
    equal-width numeric bins; all others get category counts.

    Args:
        table: Parsed Table
        column_name: Column to bin; must exist in the table
        bin_percent: Bin width as a fraction of the value range, in (0, 1]

    Returns:
        HistogramResult
    """
    if bin_percent is None:
        bin_percent = DEFAULT_BIN_PERCENT
    if not 0 < bin_percent <= 1:
        raise ValueError(f"bin_percent must be in (0, 1], got {bin_percent}")

    values = table.column(column_name).non_missing()

    if is_mostly_numeric(values):
        result = numeric_histogram(column_name, parse_numbers(values), bin_percent)
    else:
        result = categorical_histogram(column_name, values)

    logger.debug("Histogram for %s: %s, %d bins", column_name, result.kind, len(result.bins))
    return result
