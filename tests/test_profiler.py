"""Tests for column kind detection and missing value profiling."""

from autoeda.csv_table import Table, parse
from autoeda.profiler import (
    ColumnKind, categorical_limit, count_kinds, dataset_overview, is_numeric_column,
    missing_values, numeric_column_names, profile
)


def _by_name(profiles):
    return {p.name: p for p in profiles}


class TestProfile:
    """Tests for profile()."""

    def test_numeric_and_categorical(self, small_table):
        profiles = _by_name(profile(small_table))

        assert profiles["a"].kind is ColumnKind.NUMERIC
        assert profiles["a"].missing_ratio == 0.0
        assert profiles["b"].kind is ColumnKind.CATEGORICAL

    def test_profiles_follow_header_order(self, mixed_table):
        assert [p.name for p in profile(mixed_table)] == list(mixed_table.header)

    def test_mixed_kinds(self, mixed_table):
        profiles = _by_name(profile(mixed_table))

        assert profiles["id"].kind is ColumnKind.NUMERIC
        assert profiles["score"].kind is ColumnKind.NUMERIC
        assert profiles["score"].missing_count == 3
        assert profiles["score"].missing_ratio == 0.1
        assert profiles["city"].kind is ColumnKind.CATEGORICAL
        assert profiles["city"].unique_count == 3
        assert profiles["comment"].kind is ColumnKind.TEXT

    def test_all_missing_column(self, mixed_table):
        empty = _by_name(profile(mixed_table))["empty"]

        assert empty.kind is not ColumnKind.NUMERIC
        assert empty.missing_ratio == 1.0
        assert empty.numeric_count == 0

    def test_missing_ratio_bounds(self, mixed_table):
        for p in profile(mixed_table):
            assert 0.0 <= p.missing_ratio <= 1.0

    def test_missing_cells_count_against_numeric(self):
        # 4 numbers in 10 rows: below half of all rows
        table = Table(("v",), [("1",), ("2",), ("3",), ("4",)] + [("",)] * 6)
        p = profile(table)[0]

        assert p.numeric_count == 4
        assert p.kind is ColumnKind.CATEGORICAL

    def test_header_only_table(self):
        table = parse("a,b\n")
        profiles = profile(table)

        assert [p.kind for p in profiles] == [ColumnKind.CATEGORICAL, ColumnKind.CATEGORICAL]
        assert all(p.missing_ratio == 0.0 for p in profiles)

    def test_profile_is_idempotent(self, mixed_table):
        assert profile(mixed_table) == profile(mixed_table)


class TestRules:
    """Tests for the numeric and categorical cutoffs."""

    def test_numeric_needs_at_least_one_number(self):
        assert not is_numeric_column(0, 0)
        assert is_numeric_column(1, 1)

    def test_numeric_half_of_rows(self):
        assert is_numeric_column(5, 10)
        assert not is_numeric_column(4, 10)

    def test_categorical_limit(self):
        assert categorical_limit(1) == 20
        assert categorical_limit(400) == 20
        assert categorical_limit(410) == 21
        assert categorical_limit(1000) == 50

    def test_text_above_limit(self):
        rows = [(f"word{i}",) for i in range(21)]
        p = profile(Table(("w",), rows))[0]
        assert p.kind is ColumnKind.TEXT

    def test_categorical_at_limit(self):
        rows = [(f"word{i}",) for i in range(20)]
        p = profile(Table(("w",), rows))[0]
        assert p.kind is ColumnKind.CATEGORICAL


class TestSummaries:
    """Tests for overview helpers."""

    def test_numeric_column_names(self, mixed_table):
        assert numeric_column_names(profile(mixed_table)) == ["id", "score"]

    def test_count_kinds(self, mixed_table):
        counts = count_kinds(profile(mixed_table))

        assert counts[ColumnKind.NUMERIC] == 2
        assert counts[ColumnKind.CATEGORICAL] == 2
        assert counts[ColumnKind.TEXT] == 1

    def test_missing_values_sorted_descending(self, mixed_table):
        entries = missing_values(profile(mixed_table))

        assert [e.name for e in entries[:2]] == ["empty", "score"]
        ratios = [e.missing_ratio for e in entries]
        assert ratios == sorted(ratios, reverse=True)

    def test_dataset_overview(self, mixed_table):
        overview = dataset_overview(mixed_table, profile(mixed_table), file_size=1024)

        assert overview.n_rows == 30
        assert overview.n_columns == 5
        assert overview.numeric_count == 2
        assert overview.text_count == 1
        assert overview.missing_ratio == (3 + 30) / 150
        assert overview.file_size == 1024

    def test_overview_of_empty_table(self):
        overview = dataset_overview(Table(), [])
        assert overview.missing_ratio == 0.0
