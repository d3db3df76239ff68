"""Tests for numeric summaries."""

import math

import pytest

from autoeda.csv_table import Table
from autoeda.profiler import profile
from autoeda.stats import describe, summaries_to_dataframe, summarize_column


class TestDescribe:
    """Tests for describe()."""

    def test_small_numeric_column(self, small_table):
        summaries = describe(small_table, profile(small_table))

        assert list(summaries) == ["a"]
        a = summaries["a"]
        assert a.mean == 2.0
        assert a.std == pytest.approx(1.0)
        assert a.min == 1.0
        assert a.max == 3.0
        assert a.count == 3

    def test_only_numeric_columns(self, mixed_table):
        summaries = describe(mixed_table, profile(mixed_table))

        assert list(summaries) == ["id", "score"]
        assert "empty" not in summaries

    def test_missing_cells_are_skipped(self, mixed_table):
        score = describe(mixed_table, profile(mixed_table))["score"]
        assert score.count == 27

    def test_min_mean_max_order(self, mixed_table):
        for s in describe(mixed_table, profile(mixed_table)).values():
            assert s.min <= s.mean <= s.max
            assert s.std >= 0

    def test_describe_is_idempotent(self, mixed_table):
        profiles = profile(mixed_table)
        assert describe(mixed_table, profiles) == describe(mixed_table, profiles)

    def test_to_dataframe(self, small_table):
        df = summaries_to_dataframe(describe(small_table, profile(small_table)))
        assert list(df.columns) == ["Column", "Count", "Mean", "Std", "Min", "Max"]
        assert df.loc[0, "Mean"] == 2.0


    def test_to_dataframe_with_missing_column(self, mixed_table):
        profiles = profile(mixed_table)
        df = summaries_to_dataframe(describe(mixed_table, profiles), profiles)

        assert df['Missing %'].tolist() == ["0.0%", "10.0%"]

    def test_to_dataframe_with_repeated_column_name(self):
        table = Table(("a", "a"), [("1", "2"), ("3", "")])
        profiles = profile(table)
        df = summaries_to_dataframe(describe(table, profiles), profiles)

        assert len(df) == 1
        assert df['Missing %'].tolist() == ["0.0%"]


class TestSummarizeColumn:
    """Tests for summarize_column()."""

    def test_single_value_has_no_std(self):
        s = summarize_column("x", ["5"])
        assert s.mean == 5.0
        assert s.std is None

    def test_no_numbers(self):
        s = summarize_column("x", ["", "abc"])
        assert s.count == 0
        assert s.mean is None and s.min is None

    def test_sample_standard_deviation(self):
        s = summarize_column("x", ["2", "4", "4", "4", "5", "5", "7", "9"])
        assert s.std == pytest.approx(math.sqrt(32 / 7))

    def test_non_finite_cells_are_ignored(self):
        s = summarize_column("x", ["1", "nan", "inf", "3"])
        assert s.count == 2
        assert s.mean == 2.0

    def test_mostly_text_numeric_kind_uses_numbers_only(self):
        table = Table(("v",), [("1",), ("2",), ("n/a",)])
        s = describe(table, profile(table))["v"]
        assert s.count == 2
