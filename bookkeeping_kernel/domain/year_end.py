"""
Year-end result computation.

Pure functions that turn a fiscal year's per-account activity into the
year-end summary, the tax calculation, and the rows of the closing voucher.
ZERO I/O.

Result chain:
    operating_result  = revenue - expenses
    result_before_tax = operating_result + financial_income - financial_expenses
    corporate_tax     = round(result_before_tax * rate)   (positive results only)
    net_result        = result_before_tax - corporate_tax
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from uuid import UUID

from bookkeeping_kernel.db.types import round_money
from bookkeeping_kernel.domain.dtos import (
    AccountBalance,
    PayrollTotals,
    TaxCalculation,
    VoucherRowInput,
    YearEndLine,
    YearEndSummary,
)
from bookkeeping_kernel.domain.statements import natural_amount
from bookkeeping_kernel.models.account import AccountType

ZERO = Decimal("0")


def fiscal_year_range(fiscal_year: int) -> tuple[date, date]:
    """Calendar-year fiscal year: Jan 1 through Dec 31."""
    return date(fiscal_year, 1, 1), date(fiscal_year, 12, 31)


def corporate_tax_for(result_before_tax: Decimal, rate: Decimal) -> Decimal:
    """Tax on a positive result, rounded to whole cents.  Zero otherwise."""
    if result_before_tax <= ZERO:
        return ZERO
    return round_money(result_before_tax * rate)


def _section(
    activity: list[AccountBalance], account_type: AccountType
) -> tuple[tuple[YearEndLine, ...], Decimal]:
    lines = []
    for row in sorted(activity, key=lambda r: r.account_number):
        if AccountType(row.account_type) != account_type:
            continue
        amount = natural_amount(account_type, row.debit, row.credit)
        if amount != ZERO:
            lines.append(YearEndLine(row.account_number, row.account_name, amount))
    return tuple(lines), sum((line.balance for line in lines), ZERO)


def compute_year_end_summary(
    fiscal_year: int,
    activity: Iterable[AccountBalance],
    corporate_tax_rate: Decimal,
    is_closed: bool,
    revenue_fallback: Decimal | None = None,
) -> YearEndSummary:
    """
    Summarize one fiscal year from activity dated within that year.

    Args:
        fiscal_year: Calendar year being summarized.
        activity: Per-account debit/credit totals within the year.
        corporate_tax_rate: Rate applied to a positive result before tax.
        is_closed: Whether the company has already closed this year.
        revenue_fallback: Used as revenue when the ledger shows none.
    """
    activity = list(activity)
    from_date, to_date = fiscal_year_range(fiscal_year)

    revenue_lines, revenue = _section(activity, AccountType.REVENUE)
    expense_lines, expenses = _section(activity, AccountType.EXPENSE)
    asset_lines, total_assets = _section(activity, AccountType.ASSET)
    liability_lines, total_liabilities = _section(activity, AccountType.LIABILITY)
    _, financial_income = _section(activity, AccountType.FINANCIAL_INCOME)
    _, financial_expenses = _section(activity, AccountType.FINANCIAL_EXPENSE)

    if revenue == ZERO and revenue_fallback is not None:
        revenue = revenue_fallback

    operating_result = revenue - expenses
    result_before_tax = operating_result + financial_income - financial_expenses
    corporate_tax = corporate_tax_for(result_before_tax, corporate_tax_rate)

    return YearEndSummary(
        fiscal_year=fiscal_year,
        from_date=from_date,
        to_date=to_date,
        revenue=revenue,
        expenses=expenses,
        operating_result=operating_result,
        financial_income=financial_income,
        financial_expenses=financial_expenses,
        result_before_tax=result_before_tax,
        corporate_tax=corporate_tax,
        net_result=result_before_tax - corporate_tax,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        equity=total_assets - total_liabilities,
        is_closed=is_closed,
        revenue_accounts=revenue_lines,
        expense_accounts=expense_lines,
        asset_accounts=asset_lines,
        liability_accounts=liability_lines,
    )


def compute_tax_calculation(
    summary: YearEndSummary,
    output_vat: Decimal,
    input_vat: Decimal,
    payroll: PayrollTotals,
    corporate_tax_rate: Decimal,
    employer_contribution_rate: Decimal,
) -> TaxCalculation:
    """Combine the year's result, VAT and payroll into total tax liabilities."""
    vat_to_pay = output_vat - input_vat
    taxable_income = max(summary.result_before_tax, ZERO)

    return TaxCalculation(
        fiscal_year=summary.fiscal_year,
        result_before_tax=summary.result_before_tax,
        taxable_income=taxable_income,
        corporate_tax_rate=corporate_tax_rate,
        corporate_tax=summary.corporate_tax,
        output_vat=output_vat,
        input_vat=input_vat,
        vat_to_pay=vat_to_pay,
        total_salaries=payroll.gross_salaries,
        employer_contribution_rate=employer_contribution_rate,
        employer_contributions=payroll.employer_contributions,
        employee_tax=payroll.employee_tax,
        total_tax_liabilities=(
            summary.corporate_tax
            + vat_to_pay
            + payroll.employer_contributions
            + payroll.employee_tax
        ),
    )


def closing_rows(
    net_result: Decimal,
    result_account_id: UUID,
    retained_earnings_account_id: UUID,
) -> list[VoucherRowInput]:
    """
    Rows moving the net result into retained earnings.

    Profit debits the result account and credits retained earnings; a loss
    does the reverse.  Both rows carry abs(net_result).
    """
    amount = abs(net_result)
    if net_result > ZERO:
        debit_account, credit_account = result_account_id, retained_earnings_account_id
    else:
        debit_account, credit_account = retained_earnings_account_id, result_account_id

    return [
        VoucherRowInput(account_id=debit_account, debit=amount),
        VoucherRowInput(account_id=credit_account, credit=amount),
    ]


def closing_description(fiscal_year: int) -> str:
    return f"Year-end closing {fiscal_year} - transfer of net result"
