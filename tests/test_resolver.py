"""
Tests for earliest-funder resolution.
"""

import pytest

from fundtrace.ancestry.resolver import ParentResolver, ResolutionError


class TestParentResolver:

    def test_no_payments_means_no_parent(self, ledger):
        assert ParentResolver(ledger).resolve("A") is None

    def test_single_payment(self, ledger):
        ledger.fund("A", "B", 42)
        assert ParentResolver(ledger).resolve("A") == "B"

    def test_minimum_round_on_later_page(self, ledger):
        """The earliest payment sits on the last page, out of order"""
        ledger.set_pages("A", [
            [("LATE1", 900), ("LATE2", 500)],
            [("LATE3", 700)],
            [("LATE4", 800), ("EARLY", 3), ("LATE5", 600)],
        ])

        assert ParentResolver(ledger).resolve("A") == "EARLY"

    def test_descending_order_within_page(self, ledger):
        ledger.set_pages("A", [[("C", 30), ("B", 20), ("F", 10)]])
        assert ParentResolver(ledger).resolve("A") == "F"

    def test_tie_keeps_first_seen(self, ledger):
        ledger.set_pages("A", [[("FIRST", 5)], [("SECOND", 5)]])
        assert ParentResolver(ledger).resolve("A") == "FIRST"

    def test_self_payments_are_not_funding(self, ledger):
        ledger.set_pages("A", [[("A", 1), ("B", 7)]])
        assert ParentResolver(ledger).resolve("A") == "B"

    def test_only_self_payments(self, ledger):
        ledger.set_pages("A", [[("A", 1)]])
        assert ParentResolver(ledger).resolve("A") is None

    def test_round_zero_is_a_valid_minimum(self, ledger):
        ledger.set_pages("A", [[("B", 10)], [("GENESIS", 0)]])
        assert ParentResolver(ledger).resolve("A") == "GENESIS"

    def test_failure_reports_partial_parent(self, ledger):
        ledger.set_pages("A", [[("B", 10)], [("C", 1)]])
        ledger.failing_history["A"] = 1

        with pytest.raises(ResolutionError) as exc_info:
            ParentResolver(ledger).resolve("A")

        error = exc_info.value
        assert error.address == "A"
        assert error.partial_parent == "B"
        assert "page 1 unavailable" in str(error.cause)

    def test_failure_on_first_page_has_no_partial_parent(self, ledger):
        ledger.fund("A", "B", 10)
        ledger.failing_history["A"] = 0

        with pytest.raises(ResolutionError) as exc_info:
            ParentResolver(ledger).resolve("A")

        assert exc_info.value.partial_parent is None
