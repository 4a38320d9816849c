"""
Pure financial statement transformation functions.

These functions turn per-account debit/credit totals into the income
statement, the balance sheet, and the ledger-based VAT view.  ZERO I/O.
ZERO side effects.

Sign conventions:
    Debit-normal types (Asset, Expense, FinancialExpense) display
    debit - credit.  Credit-normal types (Liability, Revenue,
    FinancialIncome) display credit - debit.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from bookkeeping_kernel.domain.dtos import (
    AccountBalance,
    BalanceSheet,
    IncomeStatement,
    StatementLine,
    VatReport,
)
from bookkeeping_kernel.models.account import AccountType

ZERO = Decimal("0")

DEBIT_NORMAL_TYPES = frozenset({
    AccountType.ASSET,
    AccountType.EXPENSE,
    AccountType.FINANCIAL_EXPENSE,
})

REVENUE_TYPES = frozenset({AccountType.REVENUE, AccountType.FINANCIAL_INCOME})
EXPENSE_TYPES = frozenset({AccountType.EXPENSE, AccountType.FINANCIAL_EXPENSE})


def display_sign(account_type: AccountType | str) -> int:
    """+1 for debit-normal account types, -1 for credit-normal ones."""
    if AccountType(account_type) in DEBIT_NORMAL_TYPES:
        return 1
    return -1


def natural_amount(account_type: AccountType | str, debit: Decimal, credit: Decimal) -> Decimal:
    """Balance expressed in the account type's normal direction."""
    return (debit - credit) * display_sign(account_type)


def _lines(
    rows: Iterable[AccountBalance],
    types: frozenset[AccountType],
) -> tuple[StatementLine, ...]:
    lines = []
    for row in sorted(rows, key=lambda r: r.account_number):
        if AccountType(row.account_type) not in types:
            continue
        amount = natural_amount(row.account_type, row.debit, row.credit)
        if amount == ZERO:
            continue
        lines.append(StatementLine(row.account_number, row.account_name, amount))
    return tuple(lines)


def _total(lines: Sequence[StatementLine]) -> Decimal:
    return sum((line.amount for line in lines), ZERO)


def build_income_statement(
    activity: Iterable[AccountBalance],
    from_date: date,
    to_date: date,
) -> IncomeStatement:
    """
    Build the income statement from per-account activity within [from, to].

    Revenue and financial income appear under revenue as credit - debit;
    expenses and financial expenses under expenses as debit - credit.
    Accounts netting to zero are omitted.
    """
    activity = list(activity)
    revenue = _lines(activity, REVENUE_TYPES)
    expenses = _lines(activity, EXPENSE_TYPES)
    total_revenue = _total(revenue)
    total_expenses = _total(expenses)

    return IncomeStatement(
        from_date=from_date,
        to_date=to_date,
        revenue_accounts=revenue,
        total_revenue=total_revenue,
        expense_accounts=expenses,
        total_expenses=total_expenses,
        net_income=total_revenue - total_expenses,
    )


def build_balance_sheet(
    balances: Iterable[AccountBalance],
    as_of_date: date,
) -> BalanceSheet:
    """
    Build the balance sheet from cumulative balances up to as_of_date.

    Equity is the residual (assets - liabilities), so
    total_assets == total_liabilities + equity always holds.
    """
    balances = list(balances)
    assets = _lines(balances, frozenset({AccountType.ASSET}))
    liabilities = _lines(balances, frozenset({AccountType.LIABILITY}))
    total_assets = _total(assets)
    total_liabilities = _total(liabilities)
    equity = total_assets - total_liabilities

    return BalanceSheet(
        as_of_date=as_of_date,
        assets=assets,
        total_assets=total_assets,
        liabilities=liabilities,
        total_liabilities=total_liabilities,
        equity=equity,
        total_liabilities_and_equity=total_liabilities + equity,
    )


def build_vat_report(
    activity: Iterable[AccountBalance],
    from_date: date,
    to_date: date,
    output_vat_accounts: Iterable[str],
    input_vat_accounts: Iterable[str],
) -> VatReport:
    """Ledger VAT view: output accounts credit - debit, input accounts debit - credit."""
    output_numbers = set(output_vat_accounts)
    input_numbers = set(input_vat_accounts)

    output_vat = ZERO
    input_vat = ZERO
    for row in activity:
        if row.account_number in output_numbers:
            output_vat += row.credit - row.debit
        elif row.account_number in input_numbers:
            input_vat += row.debit - row.credit

    return VatReport(
        from_date=from_date,
        to_date=to_date,
        output_vat=output_vat,
        input_vat=input_vat,
        vat_to_pay=output_vat - input_vat,
    )
