"""
CSV parsing into an in-memory table of string cells.
"""

import logging
import re
from dataclasses import dataclass
from typing import Tuple

import pandas as pd

from config.analysis_configs import CSV_ENCODINGS

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_BOM = "\ufeff"


class UnknownColumnError(KeyError):
    """Raised when a column name or index does not exist in the table."""

    def __init__(self, column):
        super().__init__(column)
        self.column = column

    def __str__(self):
        return f"Unknown column: {self.column!r}"


@dataclass(frozen=True)
class Column:
    """Raw cells of one column, in row order."""
    name: str
    index: int
    values: Tuple[str, ...]

    def non_missing(self):
        """Cells that are not empty after trimming."""
        return [v.strip() for v in self.values if v.strip()]


class Table:
    """
    Header plus rows of string cells.

    Rows may be shorter than the header; missing trailing cells read as "".
    Cells beyond the header width are ignored. A Table is never modified
    after construction, so it can be shared between analyses.
    """

    def __init__(self, header=(), rows=()):
        self.header = tuple(header)
        self.rows = tuple(tuple(row) for row in rows)

    def __repr__(self):
        return f"Table(columns={self.n_columns}, rows={self.n_rows})"

    def __eq__(self, other):
        if not isinstance(other, Table):
            return NotImplemented
        return self.header == other.header and self.rows == other.rows

    @property
    def n_rows(self):
        return len(self.rows)

    @property
    def n_columns(self):
        return len(self.header)

    @property
    def is_empty(self):
        return self.n_columns == 0

    def has_column(self, name):
        return name in self.header

    def column_index(self, name):
        """Index of the first column called name."""
        try:
            return self.header.index(name)
        except ValueError:
            raise UnknownColumnError(name) from None

    def cell(self, row, index):
        return row[index] if index < len(row) else ""

    def column_at(self, index):
        if not 0 <= index < self.n_columns:
            raise UnknownColumnError(index)
        values = tuple(self.cell(row, index) for row in self.rows)
        return Column(self.header[index], index, values)

    def column(self, name):
        return self.column_at(self.column_index(name))

    def columns(self):
        return [self.column_at(i) for i in range(self.n_columns)]

    def to_dataframe(self):
        """Copy the table into a DataFrame of strings, padding short rows."""
        width = self.n_columns
        data = [[self.cell(row, i) for i in range(width)] for row in self.rows]
        return pd.DataFrame(data, columns=list(self.header), dtype=object)


def split_csv_line(line):
    """
    Split one CSV line on commas that are outside double quotes.

    Quote characters are kept in the fields; callers strip them.
    """
    fields = []
    buffer = []
    in_quotes = False

    for ch in line:
        if ch == '"':
            in_quotes = not in_quotes
            buffer.append(ch)
        elif ch == ',' and not in_quotes:
            fields.append("".join(buffer))
            buffer = []
        else:
            buffer.append(ch)

    fields.append("".join(buffer))
    return fields


def clean_cell(value):
    """Trim whitespace, then surrounding double quotes."""
    return value.strip().strip('"')


def parse(raw_text):
    """
    Parse raw CSV text into a Table.

    The first line is the header; blank lines after it are skipped.
    Text with no lines at all gives an empty table.
    """
    if raw_text.startswith(_BOM):
        raw_text = raw_text[len(_BOM):]
    if raw_text == "":
        logger.debug("Empty CSV input")
        return Table()

    lines = _LINE_BREAK.split(raw_text)
    header = [clean_cell(v) for v in split_csv_line(lines[0])]
    rows = [
        [clean_cell(v) for v in split_csv_line(line)]
        for line in lines[1:]
        if line.strip()
    ]

    logger.debug("Parsed CSV: %d columns, %d rows", len(header), len(rows))
    return Table(header, rows)


def from_rows(header, rows):
    """Build a Table from already split rows, cleaning every cell."""
    return Table(
        [clean_cell(str(v)) for v in header],
        [[clean_cell(str(v)) for v in row] for row in rows]
    )


def decode_csv_bytes(content, encodings=None):
    """
    Decode uploaded CSV bytes, trying several encodings.

    Returns:
        Tuple of (text, encoding_used)
    """
    for enc in encodings or CSV_ENCODINGS:
        try:
            return content.decode(enc), enc
        except UnicodeDecodeError:
            continue

    logger.warning("Could not decode CSV with %s, replacing bad bytes", encodings or CSV_ENCODINGS)
    return content.decode('utf-8', errors='replace'), 'utf-8 (with replacements)'
