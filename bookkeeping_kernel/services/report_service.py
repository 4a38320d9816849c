"""
ReportService -- balances and financial statements for one company.

Responsibility:
    Read per-account totals through LedgerSelector and shape them with the
    pure functions in domain.statements.  Nothing here is stored; every
    call recomputes from the voucher rows.
"""

from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from bookkeeping_kernel.config.loader import get_default_config
from bookkeeping_kernel.config.schema import BookkeepingConfig
from bookkeeping_kernel.domain.clock import Clock, SystemClock
from bookkeeping_kernel.domain.dtos import (
    AccountBalance,
    BalanceSheet,
    IncomeStatement,
    LedgerTotals,
    VatReport,
)
from bookkeeping_kernel.domain.statements import (
    build_balance_sheet,
    build_income_statement,
    build_vat_report,
)
from bookkeeping_kernel.logging_config import get_logger
from bookkeeping_kernel.selectors.ledger_selector import LedgerSelector

logger = get_logger("services.report")


class ReportService:
    """Read-only reporting over the ledger."""

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: BookkeepingConfig | None = None,
    ):
        self._ledger = LedgerSelector(session)
        self._clock = clock or SystemClock()
        self._config = config or get_default_config()

    def account_balances(
        self, company_id: UUID, as_of_date: date | None = None
    ) -> list[AccountBalance]:
        """Active accounts with cumulative totals.  as_of_date defaults to today."""
        as_of_date = as_of_date or self._clock.today()
        return self._ledger.account_balances(company_id, as_of_date)

    def income_statement(
        self, company_id: UUID, from_date: date, to_date: date
    ) -> IncomeStatement:
        activity = self._ledger.account_activity(company_id, from_date, to_date)
        statement = build_income_statement(activity, from_date, to_date)
        logger.debug(
            "income_statement_built",
            extra={
                "company_id": str(company_id),
                "from_date": from_date,
                "to_date": to_date,
                "net_income": statement.net_income,
            },
        )
        return statement

    def balance_sheet(self, company_id: UUID, as_of_date: date) -> BalanceSheet:
        balances = self._ledger.account_balances(company_id, as_of_date)
        sheet = build_balance_sheet(balances, as_of_date)
        logger.debug(
            "balance_sheet_built",
            extra={
                "company_id": str(company_id),
                "as_of_date": as_of_date,
                "total_assets": sheet.total_assets,
            },
        )
        return sheet

    def vat_report(self, company_id: UUID, from_date: date, to_date: date) -> VatReport:
        """VAT from the ledger's VAT accounts, not from documents."""
        activity = self._ledger.account_activity(
            company_id, from_date, to_date, include_inactive=True
        )
        return build_vat_report(
            activity,
            from_date,
            to_date,
            self._config.output_vat_accounts,
            self._config.input_vat_accounts,
        )

    def ledger_totals(self, company_id: UUID, as_of_date: date | None = None) -> LedgerTotals:
        return self._ledger.ledger_totals(company_id, as_of_date)
