"""
Tests for the pure year-end computations: result chain, corporate tax,
tax liabilities and closing rows.
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

from bookkeeping_kernel.domain.dtos import AccountBalance, PayrollTotals
from bookkeeping_kernel.domain.year_end import (
    closing_description,
    closing_rows,
    compute_tax_calculation,
    compute_year_end_summary,
    corporate_tax_for,
    fiscal_year_range,
)
from bookkeeping_kernel.models.account import AccountType

RATE = Decimal("0.206")
CONTRIBUTION_RATE = Decimal("0.3142")


def _row(number, account_type, debit="0", credit="0"):
    return AccountBalance(
        account_id=uuid4(),
        account_number=number,
        account_name=f"Account {number}",
        account_type=account_type,
        debit=Decimal(debit),
        credit=Decimal(credit),
    )


class TestCorporateTax:
    def test_profit_taxed_and_rounded(self):
        assert corporate_tax_for(Decimal("1000"), RATE) == Decimal("206.00")

    def test_rounds_half_up_to_cents(self):
        # 1234.57 * 0.206 = 254.32142
        assert corporate_tax_for(Decimal("1234.57"), RATE) == Decimal("254.32")
        # 2.5 * 0.206 = 0.515
        assert corporate_tax_for(Decimal("2.5"), RATE) == Decimal("0.52")

    def test_loss_untaxed(self):
        assert corporate_tax_for(Decimal("-500"), RATE) == Decimal("0")

    def test_zero_untaxed(self):
        assert corporate_tax_for(Decimal("0"), RATE) == Decimal("0")


class TestYearEndSummary:
    def test_result_chain(self):
        activity = [
            _row("3001", AccountType.REVENUE, credit="1000"),
            _row("5010", AccountType.EXPENSE, debit="200"),
            _row("8310", AccountType.FINANCIAL_INCOME, credit="50"),
            _row("8410", AccountType.FINANCIAL_EXPENSE, debit="30"),
            _row("1930", AccountType.ASSET, debit="820"),
        ]
        summary = compute_year_end_summary(2024, activity, RATE, is_closed=False)

        assert summary.revenue == Decimal("1000")
        assert summary.expenses == Decimal("200")
        assert summary.operating_result == Decimal("800")
        assert summary.financial_income == Decimal("50")
        assert summary.financial_expenses == Decimal("30")
        assert summary.result_before_tax == Decimal("820")
        assert summary.corporate_tax == Decimal("168.92")
        assert summary.net_result == Decimal("651.08")
        assert summary.total_assets == Decimal("820")
        assert summary.equity == Decimal("820")
        assert summary.from_date == date(2024, 1, 1)
        assert summary.to_date == date(2024, 12, 31)
        assert not summary.is_closed

    def test_account_sections_listed(self):
        activity = [
            _row("3002", AccountType.REVENUE, credit="10"),
            _row("3001", AccountType.REVENUE, credit="20"),
            _row("2440", AccountType.LIABILITY, credit="30"),
        ]
        summary = compute_year_end_summary(2024, activity, RATE, is_closed=True)

        assert [line.account_number for line in summary.revenue_accounts] == ["3001", "3002"]
        assert summary.liability_accounts[0].balance == Decimal("30")
        assert summary.expense_accounts == ()
        assert summary.is_closed

    def test_loss_has_no_tax(self):
        activity = [_row("5010", AccountType.EXPENSE, debit="500")]
        summary = compute_year_end_summary(2024, activity, RATE, is_closed=False)

        assert summary.result_before_tax == Decimal("-500")
        assert summary.corporate_tax == Decimal("0")
        assert summary.net_result == Decimal("-500")

    def test_revenue_fallback_used_only_without_ledger_revenue(self):
        summary = compute_year_end_summary(
            2024, [], RATE, is_closed=False, revenue_fallback=Decimal("2000")
        )
        assert summary.revenue == Decimal("2000")
        assert summary.corporate_tax == Decimal("412.00")

        activity = [_row("3001", AccountType.REVENUE, credit="1000")]
        summary = compute_year_end_summary(
            2024, activity, RATE, is_closed=False, revenue_fallback=Decimal("2000")
        )
        assert summary.revenue == Decimal("1000")


class TestTaxCalculation:
    def test_total_liabilities(self):
        summary = compute_year_end_summary(
            2024, [_row("3001", AccountType.REVENUE, credit="1000")], RATE, is_closed=False
        )
        payroll = PayrollTotals(
            gross_salaries=Decimal("30000"),
            employer_contributions=Decimal("9426"),
            employee_tax=Decimal("7000"),
        )
        calc = compute_tax_calculation(
            summary, Decimal("250"), Decimal("50"), payroll, RATE, CONTRIBUTION_RATE
        )

        assert calc.fiscal_year == 2024
        assert calc.taxable_income == Decimal("1000")
        assert calc.corporate_tax == Decimal("206.00")
        assert calc.vat_to_pay == Decimal("200")
        assert calc.total_salaries == Decimal("30000")
        assert calc.employer_contribution_rate == CONTRIBUTION_RATE
        assert calc.total_tax_liabilities == Decimal("16832.00")

    def test_loss_gives_zero_taxable_income(self):
        summary = compute_year_end_summary(
            2024, [_row("5010", AccountType.EXPENSE, debit="100")], RATE, is_closed=False
        )
        calc = compute_tax_calculation(
            summary, Decimal("0"), Decimal("0"), PayrollTotals(), RATE, CONTRIBUTION_RATE
        )

        assert calc.result_before_tax == Decimal("-100")
        assert calc.taxable_income == Decimal("0")
        assert calc.total_tax_liabilities == Decimal("0")


class TestClosingRows:
    def test_profit_moves_to_retained_earnings(self):
        result_id, retained_id = uuid4(), uuid4()
        debit_row, credit_row = closing_rows(Decimal("794.00"), result_id, retained_id)

        assert (debit_row.account_id, debit_row.debit) == (result_id, Decimal("794.00"))
        assert (credit_row.account_id, credit_row.credit) == (retained_id, Decimal("794.00"))

    def test_loss_reverses_direction(self):
        result_id, retained_id = uuid4(), uuid4()
        debit_row, credit_row = closing_rows(Decimal("-500"), result_id, retained_id)

        assert (debit_row.account_id, debit_row.debit) == (retained_id, Decimal("500"))
        assert (credit_row.account_id, credit_row.credit) == (result_id, Decimal("500"))

    def test_rows_balance(self):
        rows = closing_rows(Decimal("123.45"), uuid4(), uuid4())
        assert sum(r.debit for r in rows) == sum(r.credit for r in rows)

    def test_description_and_range(self):
        assert closing_description(2024) == "Year-end closing 2024 - transfer of net result"
        assert fiscal_year_range(2025) == (date(2025, 1, 1), date(2025, 12, 31))
