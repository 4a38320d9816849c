"""
Domain DTOs -- immutable value objects crossing the service boundary.

Responsibility:
    Every value a service or the CompanyLedger facade hands back to a caller
    is one of these frozen dataclasses, never an ORM instance.  Input
    records (VoucherRowInput, MarkVatPaidRequest) live here as well.

Architecture position:
    Kernel > Domain.  Imports model enums only; zero I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from bookkeeping_kernel.models.account import AccountType
from bookkeeping_kernel.models.vat_period import VatPeriodType
from bookkeeping_kernel.models.voucher import VoucherType

ZERO = Decimal("0")


# =============================================================================
# Companies and accounts
# =============================================================================


@dataclass(frozen=True)
class CompanyInfo:
    id: UUID
    name: str
    organization_number: str | None
    current_fiscal_year: int
    vat_period_type: VatPeriodType


@dataclass(frozen=True)
class AccountInfo:
    id: UUID
    account_number: str
    name: str
    account_type: AccountType
    is_active: bool


@dataclass(frozen=True)
class AccountBalance:
    """Debit and credit totals for one account over a date window."""

    account_id: UUID
    account_number: str
    account_name: str
    account_type: AccountType
    debit: Decimal
    credit: Decimal

    @property
    def balance(self) -> Decimal:
        """Net balance (debit - credit)."""
        return self.debit - self.credit


# =============================================================================
# Vouchers
# =============================================================================


@dataclass(frozen=True)
class VoucherRowInput:
    """One requested row of a voucher to be posted."""

    account_id: UUID
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    description: str | None = None


@dataclass(frozen=True)
class VoucherRowInfo:
    id: UUID
    account_id: UUID
    account_number: str
    account_name: str
    debit: Decimal
    credit: Decimal
    description: str | None
    sort_order: int


@dataclass(frozen=True)
class VoucherInfo:
    id: UUID
    company_id: UUID
    voucher_number: str
    voucher_date: date
    description: str
    voucher_type: VoucherType
    created_at: datetime | None
    rows: tuple[VoucherRowInfo, ...] = ()

    @property
    def total_debit(self) -> Decimal:
        return sum((row.debit for row in self.rows), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((row.credit for row in self.rows), ZERO)


@dataclass(frozen=True)
class VoucherSummary:
    """Listing entry; total_amount is the voucher's debit sum."""

    id: UUID
    voucher_number: str
    voucher_date: date
    description: str
    voucher_type: VoucherType
    total_amount: Decimal


# =============================================================================
# Statements
# =============================================================================


@dataclass(frozen=True)
class StatementLine:
    account_number: str
    account_name: str
    amount: Decimal


@dataclass(frozen=True)
class IncomeStatement:
    from_date: date
    to_date: date
    revenue_accounts: tuple[StatementLine, ...]
    total_revenue: Decimal
    expense_accounts: tuple[StatementLine, ...]
    total_expenses: Decimal
    net_income: Decimal


@dataclass(frozen=True)
class BalanceSheet:
    as_of_date: date
    assets: tuple[StatementLine, ...]
    total_assets: Decimal
    liabilities: tuple[StatementLine, ...]
    total_liabilities: Decimal
    equity: Decimal
    total_liabilities_and_equity: Decimal


@dataclass(frozen=True)
class VatReport:
    from_date: date
    to_date: date
    output_vat: Decimal
    input_vat: Decimal
    vat_to_pay: Decimal


@dataclass(frozen=True)
class LedgerTotals:
    total_debit: Decimal
    total_credit: Decimal

    @property
    def is_balanced(self) -> bool:
        return self.total_debit == self.total_credit


# =============================================================================
# VAT periods
# =============================================================================


@dataclass(frozen=True)
class VatPeriodInfo:
    year: int
    period: int
    period_type: VatPeriodType
    period_name: str
    from_date: date
    to_date: date
    output_vat: Decimal
    input_vat: Decimal
    vat_to_pay: Decimal
    is_paid: bool = False
    paid_at: datetime | None = None
    paid_amount: Decimal | None = None
    payment_reference: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class VatSummary:
    year: int
    period_type: VatPeriodType
    periods: tuple[VatPeriodInfo, ...]
    total_output_vat: Decimal
    total_input_vat: Decimal
    total_vat_to_pay: Decimal
    total_paid: Decimal
    remaining: Decimal


@dataclass(frozen=True)
class MarkVatPaidRequest:
    year: int
    period: int
    period_type: VatPeriodType
    paid_amount: Decimal | None = None
    payment_reference: str | None = None
    notes: str | None = None


# =============================================================================
# Year end
# =============================================================================


@dataclass(frozen=True)
class YearEndLine:
    account_number: str
    account_name: str
    balance: Decimal


@dataclass(frozen=True)
class YearEndSummary:
    fiscal_year: int
    from_date: date
    to_date: date
    revenue: Decimal
    expenses: Decimal
    operating_result: Decimal
    financial_income: Decimal
    financial_expenses: Decimal
    result_before_tax: Decimal
    corporate_tax: Decimal
    net_result: Decimal
    total_assets: Decimal
    total_liabilities: Decimal
    equity: Decimal
    is_closed: bool
    revenue_accounts: tuple[YearEndLine, ...] = ()
    expense_accounts: tuple[YearEndLine, ...] = ()
    asset_accounts: tuple[YearEndLine, ...] = ()
    liability_accounts: tuple[YearEndLine, ...] = ()


@dataclass(frozen=True)
class PayrollTotals:
    gross_salaries: Decimal = ZERO
    employer_contributions: Decimal = ZERO
    employee_tax: Decimal = ZERO


@dataclass(frozen=True)
class TaxCalculation:
    fiscal_year: int
    result_before_tax: Decimal
    taxable_income: Decimal
    corporate_tax_rate: Decimal
    corporate_tax: Decimal
    output_vat: Decimal
    input_vat: Decimal
    vat_to_pay: Decimal
    total_salaries: Decimal
    employer_contribution_rate: Decimal
    employer_contributions: Decimal
    employee_tax: Decimal
    total_tax_liabilities: Decimal


@dataclass(frozen=True)
class CloseYearResult:
    """Outcome of a year-end close.  code is set only on failure."""

    success: bool
    message: str
    new_fiscal_year: int | None = None
    code: str | None = None
    closing_voucher_number: str | None = None
    net_result: Decimal = field(default=ZERO)
