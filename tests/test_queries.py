"""Tests for the read-only LedgerQueries views and aggregates."""

from decimal import Decimal

import pytest

from helpers import fill, make_record
from ledger.exceptions import InvalidDateError


class TestListing:
    """Tests for list_all and category filtering."""

    def test_empty_ledger_signals_no_records(self, queries):
        selection = queries.list_all()
        assert not selection.found
        assert selection.empty_message == "No expenses recorded."

    def test_list_all_uses_one_based_positions(self, store, queries):
        records = fill(store, [make_record("2024-01-01"), make_record("2024-01-02")])
        selection = queries.list_all()
        assert [entry.position for entry in selection] == [1, 2]
        assert list(selection.records) == records

    def test_category_match_is_case_insensitive(self, store, queries):
        fill(
            store,
            [
                make_record("2024-01-01", "Food"),
                make_record("2024-01-02", "rent"),
                make_record("2024-01-03", "FOOD"),
            ],
        )
        selection = queries.filter_by_category("food")
        assert [entry.position for entry in selection] == [1, 3]

    def test_category_match_is_exact(self, store, queries):
        fill(store, [make_record("2024-01-01", "food court")])
        assert not queries.filter_by_category("food").found

    def test_category_without_matches_names_category(self, store, queries):
        fill(store, [make_record("2024-01-01", "rent")])
        selection = queries.filter_by_category("travel")
        assert not selection.found
        assert selection.empty_message == "No expenses found for category: travel"


class TestDateRange:
    """Tests for the inclusive date-range filter."""

    def test_bounds_are_inclusive(self, store, queries):
        fill(
            store,
            [
                make_record("2023-12-31"),
                make_record("2024-01-01"),
                make_record("2024-01-15"),
                make_record("2024-01-31"),
                make_record("2024-02-01"),
            ],
        )
        selection = queries.filter_by_date_range("2024-01-01", "2024-01-31")
        assert [r.date for r in selection.records] == ["2024-01-01", "2024-01-15", "2024-01-31"]

    def test_no_matches_is_not_an_error(self, store, queries):
        fill(store, [make_record("2024-05-01")])
        selection = queries.filter_by_date_range("2024-01-01", "2024-01-31")
        assert not selection.found
        assert selection.empty_message == "No expenses found in this date range."

    def test_reversed_range_matches_nothing(self, store, queries):
        fill(store, [make_record("2024-01-15")])
        assert not queries.filter_by_date_range("2024-01-31", "2024-01-01").found

    @pytest.mark.parametrize(
        "start,end", [("2024-13-01", "2024-12-31"), ("2024-01-01", "31/01/2024"), ("", "2024-01-31")]
    )
    def test_bad_bound_raises(self, store, queries, start, end):
        fill(store, [make_record("2024-01-15")])
        with pytest.raises(InvalidDateError):
            queries.filter_by_date_range(start, end)

    def test_bad_record_date_raises(self, store, queries):
        fill(store, [make_record("2024-01-15"), make_record("yesterday")])
        with pytest.raises(InvalidDateError):
            queries.filter_by_date_range("2024-01-01", "2024-01-31")


class TestTotals:
    """Tests for total_all and total_for_month."""

    def test_total_all(self, store, queries):
        fill(
            store,
            [
                make_record("2024-01-01", amount="12.50"),
                make_record("2024-01-02", amount="-3.00"),
                make_record("2024-01-03", amount="100"),
            ],
        )
        assert queries.total_all() == Decimal("109.50")

    def test_total_all_empty_is_zero(self, queries):
        assert queries.total_all() == 0

    def test_month_total_sums_matching_prefix(self, store, queries):
        fill(
            store,
            [
                make_record("2024-01-15", amount="10"),
                make_record("2024-01-02", amount="5.25"),
                make_record("2024-02-01", amount="99"),
            ],
        )
        assert queries.total_for_month("2024-01") == Decimal("15.25")

    def test_month_total_is_a_textual_prefix_match(self, store, queries):
        """A short prefix also catches later months sharing its leading text."""
        fill(
            store,
            [
                make_record("2024-01-15", amount="10"),
                make_record("2024-10-01", amount="7"),
                make_record("2024-11-30", amount="3"),
            ],
        )
        assert queries.total_for_month("2024-1") == Decimal("10")
        assert queries.total_for_month("") == Decimal("20")

    def test_queries_do_not_touch_the_file(self, store, queries, data_file):
        fill(store, [make_record("2024-01-15")])
        before = data_file.read_bytes()
        queries.list_all()
        queries.filter_by_category("food")
        queries.filter_by_date_range("2024-01-01", "2024-12-31")
        queries.total_all()
        queries.total_for_month("2024-01")
        assert data_file.read_bytes() == before
