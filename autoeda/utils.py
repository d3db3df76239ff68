"""
Utility functions shared by the analysis engine and the app.
"""

import math

import numpy as np

from config.analysis_configs import NUMERIC_RATIO_THRESHOLD


def is_missing(value):
    """A cell is missing when it is empty after trimming whitespace."""
    return value is None or value.strip() == ""


def to_float(value):
    """
    Parse a cell as a base-10 floating-point number.

    Integers are accepted. Digit-group underscores and non-finite values
    (nan, inf) are rejected so they never reach numeric aggregates.

    Returns:
        float, or None when the cell is not a usable number
    """
    if value is None:
        return None
    text = value.strip()
    if not text or "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_numbers(values):
    """Return the parseable numbers among values, in order."""
    numbers = []
    for value in values:
        number = to_float(value)
        if number is not None:
            numbers.append(number)
    return numbers


def is_mostly_numeric(values, threshold=NUMERIC_RATIO_THRESHOLD):
    """
    Decide whether a list of non-missing values should be treated as numeric.

    The ratio is measured against the values given (callers pass the
    non-missing cells). An empty list is never numeric.
    """
    if not values:
        return False
    return len(parse_numbers(values)) >= len(values) * threshold


def round_half_up(value):
    """Round to the nearest integer, halves away from zero."""
    return int(math.floor(value + 0.5))


def format_bytes(size_bytes):
    """Convert bytes to human-readable format."""
    if not size_bytes:
        return "0 B"
    size_names = ("B", "KB", "MB", "GB", "TB")
    i = min(int(np.floor(np.log(size_bytes) / np.log(1024))), len(size_names) - 1)
    p = np.power(1024, i)
    s = round(size_bytes / p, 2)
    return f"{s} {size_names[i]}"


def format_percentage(value, decimals=1):
    """Format a decimal value as percentage string."""
    return f"{value * 100:.{decimals}f}%"


def format_number(value, decimals=3):
    """Format an optional float, using '-' for absent values."""
    if value is None:
        return "-"
    return f"{value:.{decimals}f}"


def truncate_string(s, max_length=50):
    """Truncate a string to a maximum length."""
    if len(str(s)) > max_length:
        return str(s)[:max_length-3] + "..."
    return str(s)
