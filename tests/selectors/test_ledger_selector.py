"""
Tests for LedgerSelector aggregation windows and reference checks.
"""

from datetime import date
from decimal import Decimal

SALE = (("1930", 1000, 0), ("3001", 0, 1000))


def _by_number(rows):
    return {r.account_number: r for r in rows}


class TestAccountActivity:
    def test_window_bounds_inclusive(self, post, ledger_selector, company):
        post(date(2024, 1, 1), *SALE)
        post(date(2024, 6, 30), *SALE)
        post(date(2024, 7, 1), *SALE)

        activity = _by_number(ledger_selector.account_activity(company.id, date(2024, 1, 1), date(2024, 6, 30)))
        assert activity["1930"].debit == Decimal("2000")

    def test_unbounded_window(self, post, ledger_selector, company):
        post(date(2024, 1, 1), *SALE)
        post(date(2026, 1, 1), *SALE)

        assert _by_number(ledger_selector.account_activity(company.id))["3001"].credit == Decimal("2000")

    def test_ordered_by_account_number(self, ledger_selector, company):
        numbers = [r.account_number for r in ledger_selector.account_activity(company.id)]
        assert numbers == sorted(numbers)

    def test_include_inactive(self, post, account_service, ledger_selector, company, accounts):
        post(date(2024, 3, 1), *SALE)
        account_service.delete_account(company.id, accounts["3001"].id)

        assert "3001" not in _by_number(ledger_selector.account_activity(company.id))
        everything = _by_number(ledger_selector.account_activity(company.id, include_inactive=True))
        assert everything["3001"].credit == Decimal("1000")

    def test_multiple_rows_on_same_account(self, post, ledger_selector, company):
        post(date(2024, 3, 1), ("1930", 600, 0), ("1930", 400, 0), ("3001", 0, 1000))

        activity = _by_number(ledger_selector.account_activity(company.id))
        assert activity["1930"].debit == Decimal("1000")


class TestAccountReference:
    def test_referenced_after_posting(self, post, ledger_selector, accounts):
        assert not ledger_selector.is_account_referenced(accounts["1930"].id)

        post(date(2024, 3, 1), *SALE)

        assert ledger_selector.is_account_referenced(accounts["1930"].id)
        assert not ledger_selector.is_account_referenced(accounts["5010"].id)
