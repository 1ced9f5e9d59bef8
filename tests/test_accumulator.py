# =============================================================================
# tests/test_accumulator.py - Column Statistics Tests
# =============================================================================
# Tests for resolve_column_type() and ColumnAccumulator (lib/accumulator.py).
#
# Run with: pytest tests/test_accumulator.py -v
# =============================================================================

import pytest

from core.models import SemanticType
from lib.accumulator import (
    MAX_FORMAT_EXAMPLES,
    SUBTYPE_THRESHOLD,
    ColumnAccumulator,
    resolve_column_type,
)


def accumulate(values: list[str], name: str = "col", **kwargs) -> ColumnAccumulator:
    accumulator = ColumnAccumulator(name, **kwargs)
    for value in values:
        accumulator.count_present()
        accumulator.add(value)
    return accumulator


# =============================================================================
# Type Resolution
# =============================================================================

class TestResolveColumnType:
    """Dominant type, confidence and subtypes from match counts."""

    def test_threshold_constant(self):
        assert SUBTYPE_THRESHOLD == 0.05

    def test_highest_confidence_wins(self):
        counts = {SemanticType.EMAIL: 9, SemanticType.URL: 1}
        type_name, confidence, subtypes = resolve_column_type(counts, 10)
        assert type_name == SemanticType.EMAIL
        assert confidence == pytest.approx(0.9)
        assert subtypes == [SemanticType.URL]

    def test_tie_goes_to_priority_order(self):
        """Every integer is also a float; Integer is listed first."""
        counts = {SemanticType.INTEGER: 4, SemanticType.FLOAT: 4}
        type_name, confidence, subtypes = resolve_column_type(counts, 4)
        assert type_name == SemanticType.INTEGER
        assert confidence == 1.0
        assert subtypes == [SemanticType.FLOAT]

    def test_subtype_threshold_is_inclusive(self):
        counts = {SemanticType.FLOAT: 100, SemanticType.INTEGER: 5}
        _, _, subtypes = resolve_column_type(counts, 100)
        assert subtypes == [SemanticType.INTEGER]

    def test_below_threshold_is_not_a_subtype(self):
        counts = {SemanticType.FLOAT: 100, SemanticType.INTEGER: 4}
        _, _, subtypes = resolve_column_type(counts, 100)
        assert subtypes == []

    def test_nothing_matched_is_string(self):
        assert resolve_column_type({}, 3) == (SemanticType.STRING, 1.0, [])

    def test_no_values_is_string_with_zero_confidence(self):
        assert resolve_column_type({}, 0) == (SemanticType.STRING, 0.0, [])


# =============================================================================
# Counting
# =============================================================================

class TestCounts:
    """Count invariants."""

    def test_nulls_counted_separately(self):
        acc = accumulate(["1", "", "3"])
        assert acc.total_count == 3
        assert acc.analyzed_count == 3
        assert acc.null_count == 1
        assert acc.valid_count == 2

    def test_invariants_hold(self):
        acc = accumulate(["a", "b", "", "a", "c", ""])
        report = acc.finalize()
        assert report.analyzed_count <= report.total_count
        assert report.null_count <= report.analyzed_count
        assert report.unique_values <= report.analyzed_count - report.null_count
        assert report.unique_values == 3

    def test_present_but_not_analyzed(self):
        """count_present() alone only moves total_count."""
        acc = accumulate(["1", "2"])
        acc.count_present()
        report = acc.finalize()
        assert report.total_count == 3
        assert report.analyzed_count == 2

    def test_lengths(self):
        report = accumulate(["ab", "", "abcd", "a"]).finalize()
        assert report.min_length == 1
        assert report.max_length == 4

    def test_lengths_count_characters(self):
        report = accumulate(["é", "日本"]).finalize()
        assert report.min_length == 1
        assert report.max_length == 2


# =============================================================================
# Examples and Distinct Values
# =============================================================================

class TestExamples:
    """Up to five distinct examples, in first-seen order."""

    def test_cap(self):
        assert MAX_FORMAT_EXAMPLES == 5
        report = accumulate([str(i) for i in range(10)]).finalize()
        assert report.format_examples == ["0", "1", "2", "3", "4"]

    def test_distinct_only(self):
        report = accumulate(["x", "x", "y", "", "x", "z"]).finalize()
        assert report.format_examples == ["x", "y", "z"]

    def test_nulls_never_examples(self):
        report = accumulate(["", ""]).finalize()
        assert report.format_examples == []


class TestDistinctTracking:
    """Distinct tracking is capped."""

    def test_exact_under_cap(self):
        report = accumulate(["a", "b", "a"]).finalize()
        assert report.unique_values == 2
        assert report.unique_values_exact is True

    def test_cap_makes_count_a_lower_bound(self):
        report = accumulate(["a", "b", "c", "d", "a"], max_tracked_distinct=2).finalize()
        assert report.unique_values == 2
        assert report.unique_values_exact is False

    def test_repeats_after_cap_do_not_overflow(self):
        report = accumulate(["a", "b", "a", "b"], max_tracked_distinct=2).finalize()
        assert report.unique_values == 2
        assert report.unique_values_exact is True


# =============================================================================
# Extrema
# =============================================================================

class TestExtrema:
    """min/max follow the resolved type's ordering."""

    def test_integers_compare_numerically(self):
        report = accumulate(["9", "10", "100", "-5"]).finalize()
        assert report.type_name == SemanticType.INTEGER
        assert report.min_value == "-5"
        assert report.max_value == "100"

    def test_floats_compare_numerically(self):
        report = accumulate(["2.5", "10", "-0.75", "1e3"]).finalize()
        assert report.type_name == SemanticType.FLOAT
        assert report.min_value == "-0.75"
        assert report.max_value == "1e3"

    def test_dates_compare_chronologically(self):
        report = accumulate(["15/03/2024", "2023-12-31", "01/01/2025"]).finalize()
        assert report.type_name == SemanticType.DATE
        assert report.min_value == "2023-12-31"
        assert report.max_value == "01/01/2025"

    def test_datetimes_compare_in_utc(self):
        report = accumulate([
            "2024-01-01T10:00:00+05:00",
            "2024-01-01T06:00:00",
            "2024-01-01T04:00:00Z",
        ]).finalize()
        assert report.type_name == SemanticType.DATETIME
        assert report.min_value == "2024-01-01T04:00:00Z"
        assert report.max_value == "2024-01-01T06:00:00"

    def test_times_compare_chronologically(self):
        report = accumulate(["09:30", "23:00:01", "00:15:00"]).finalize()
        assert report.min_value == "00:15:00"
        assert report.max_value == "23:00:01"

    def test_mixed_column_uses_values_of_dominant_type(self):
        """The odd text value is left out of numeric extrema."""
        report = accumulate(["5", "12", "30", "n/a"]).finalize()
        assert report.type_name == SemanticType.INTEGER
        assert report.confidence == pytest.approx(0.75)
        assert report.min_value == "5"
        assert report.max_value == "30"

    def test_strings_compare_lexicographically(self):
        report = accumulate(["pear", "Apple", "banana"]).finalize()
        assert report.type_name == SemanticType.STRING
        assert report.min_value == "Apple"
        assert report.max_value == "pear"

    def test_first_occurrence_wins_on_equal_keys(self):
        report = accumulate(["1.0", "1", "1.00"]).finalize()
        assert report.type_name == SemanticType.FLOAT
        assert report.min_value == "1.0"
        assert report.max_value == "1.0"

    def test_all_null_column(self):
        report = accumulate(["", ""]).finalize()
        assert report.type_name == SemanticType.STRING
        assert report.confidence == 0.0
        assert report.min_value is None
        assert report.max_value is None
        assert report.min_length == 0
        assert report.max_length == 0
