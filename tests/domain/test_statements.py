"""
Tests for the pure statement builders in bookkeeping_kernel.domain.statements.

No database: every test feeds AccountBalance rows directly.
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from bookkeeping_kernel.domain.dtos import AccountBalance
from bookkeeping_kernel.domain.statements import (
    build_balance_sheet,
    build_income_statement,
    build_vat_report,
    display_sign,
    natural_amount,
)
from bookkeeping_kernel.models.account import AccountType

FROM = date(2024, 1, 1)
TO = date(2024, 12, 31)


def _row(number, account_type, debit="0", credit="0", name=None):
    return AccountBalance(
        account_id=uuid4(),
        account_number=number,
        account_name=name or f"Account {number}",
        account_type=account_type,
        debit=Decimal(debit),
        credit=Decimal(credit),
    )


class TestSignConventions:
    @pytest.mark.parametrize(
        "account_type,expected",
        [
            (AccountType.ASSET, 1),
            (AccountType.EXPENSE, 1),
            (AccountType.FINANCIAL_EXPENSE, 1),
            (AccountType.LIABILITY, -1),
            (AccountType.REVENUE, -1),
            (AccountType.FINANCIAL_INCOME, -1),
        ],
    )
    def test_display_sign(self, account_type, expected):
        assert display_sign(account_type) == expected

    def test_display_sign_accepts_stored_string(self):
        assert display_sign("asset") == 1

    def test_natural_amount_for_revenue_is_credit_minus_debit(self):
        assert natural_amount(AccountType.REVENUE, Decimal("100"), Decimal("1100")) == Decimal("1000")

    def test_account_balance_is_debit_minus_credit(self):
        assert _row("3001", AccountType.REVENUE, credit="250").balance == Decimal("-250")


class TestIncomeStatement:
    def test_revenue_and_expense_sections(self):
        activity = [
            _row("3001", AccountType.REVENUE, credit="1000"),
            _row("5010", AccountType.EXPENSE, debit="300"),
            _row("1930", AccountType.ASSET, debit="700"),
        ]
        statement = build_income_statement(activity, FROM, TO)

        assert [line.account_number for line in statement.revenue_accounts] == ["3001"]
        assert statement.total_revenue == Decimal("1000")
        assert [line.account_number for line in statement.expense_accounts] == ["5010"]
        assert statement.total_expenses == Decimal("300")
        assert statement.net_income == Decimal("700")
        assert statement.from_date == FROM
        assert statement.to_date == TO

    def test_financial_items_fold_into_sections(self):
        activity = [
            _row("8310", AccountType.FINANCIAL_INCOME, credit="50"),
            _row("8410", AccountType.FINANCIAL_EXPENSE, debit="20"),
        ]
        statement = build_income_statement(activity, FROM, TO)

        assert statement.total_revenue == Decimal("50")
        assert statement.total_expenses == Decimal("20")
        assert statement.net_income == Decimal("30")

    def test_zero_accounts_omitted(self):
        activity = [
            _row("3001", AccountType.REVENUE),
            _row("3002", AccountType.REVENUE, debit="40", credit="40"),
        ]
        statement = build_income_statement(activity, FROM, TO)

        assert statement.revenue_accounts == ()
        assert statement.net_income == Decimal("0")

    def test_lines_sorted_by_account_number(self):
        activity = [
            _row("6110", AccountType.EXPENSE, debit="1"),
            _row("4010", AccountType.EXPENSE, debit="1"),
            _row("5010", AccountType.EXPENSE, debit="1"),
        ]
        statement = build_income_statement(activity, FROM, TO)

        assert [line.account_number for line in statement.expense_accounts] == [
            "4010",
            "5010",
            "6110",
        ]


class TestBalanceSheet:
    def test_equity_is_residual(self):
        balances = [
            _row("1930", AccountType.ASSET, debit="1250"),
            _row("2610", AccountType.LIABILITY, credit="250"),
            _row("3001", AccountType.REVENUE, credit="1000"),
        ]
        sheet = build_balance_sheet(balances, TO)

        assert sheet.total_assets == Decimal("1250")
        assert sheet.total_liabilities == Decimal("250")
        assert sheet.equity == Decimal("1000")
        assert sheet.total_liabilities_and_equity == sheet.total_assets

    def test_income_accounts_excluded_from_sections(self):
        balances = [_row("3001", AccountType.REVENUE, credit="1000")]
        sheet = build_balance_sheet(balances, TO)

        assert sheet.assets == ()
        assert sheet.liabilities == ()

    def test_negative_asset_shown_negative(self):
        balances = [_row("1930", AccountType.ASSET, credit="100")]
        sheet = build_balance_sheet(balances, TO)

        assert sheet.assets[0].amount == Decimal("-100")


class TestVatReport:
    def test_output_minus_input(self):
        activity = [
            _row("2610", AccountType.LIABILITY, credit="250"),
            _row("2620", AccountType.LIABILITY, credit="60", debit="10"),
            _row("2640", AccountType.LIABILITY, debit="80"),
            _row("1930", AccountType.ASSET, debit="5000"),
        ]
        report = build_vat_report(activity, FROM, TO, ("2610", "2620", "2630"), ("2640",))

        assert report.output_vat == Decimal("300")
        assert report.input_vat == Decimal("80")
        assert report.vat_to_pay == Decimal("220")

    def test_no_vat_activity(self):
        report = build_vat_report([], FROM, TO, ("2610",), ("2640",))

        assert report.output_vat == Decimal("0")
        assert report.vat_to_pay == Decimal("0")
