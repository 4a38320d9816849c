"""
YearEndService -- fiscal year result, tax figures, and closing.

Responsibility:
    Summarize a fiscal year from the ledger, compute the year's tax
    liabilities, and close the year by posting the closing voucher and
    advancing the company's open fiscal year.

Architecture position:
    Kernel > Services.  Orchestrates AccountService and VoucherService
    inside the caller's transaction.

Invariants enforced:
    - Only the company's current fiscal year can be closed, and only once.
    - Closing is atomic: the closing voucher, any closing accounts it
      needs, and the fiscal-year advance are flushed in the caller's
      transaction.  A failure at any step raises before the advance, and
      the caller's rollback discards the rest.
    - Concurrent closes of the same company serialize on the company row
      lock; the second one sees the advanced year and gets
      AlreadyClosedError.

Failure modes:
    - CompanyNotFoundError, AlreadyClosedError, PriorYearOpenError.
"""

from uuid import UUID

from sqlalchemy.orm import Session

from bookkeeping_kernel.config.loader import get_default_config
from bookkeeping_kernel.config.schema import BookkeepingConfig
from bookkeeping_kernel.domain.dtos import CloseYearResult, TaxCalculation, YearEndSummary
from bookkeeping_kernel.domain.vat_periods import sum_in_range
from bookkeeping_kernel.domain.year_end import (
    closing_description,
    closing_rows,
    compute_tax_calculation,
    compute_year_end_summary,
    fiscal_year_range,
)
from bookkeeping_kernel.exceptions import AlreadyClosedError, PriorYearOpenError
from bookkeeping_kernel.logging_config import LogContext, get_logger
from bookkeeping_kernel.models.account import AccountType
from bookkeeping_kernel.models.company import Company
from bookkeeping_kernel.models.voucher import VoucherType
from bookkeeping_kernel.selectors.document_selector import DocumentSelector
from bookkeeping_kernel.selectors.ledger_selector import LedgerSelector
from bookkeeping_kernel.services.account_service import AccountService
from bookkeeping_kernel.services.base import BaseService
from bookkeeping_kernel.services.voucher_service import VoucherService

logger = get_logger("services.year_end")


class YearEndService(BaseService[Company]):
    """Service for year-end summaries and closing."""

    def __init__(
        self,
        session: Session,
        config: BookkeepingConfig | None = None,
        voucher_service: VoucherService | None = None,
        account_service: AccountService | None = None,
    ):
        super().__init__(session)
        self._config = config or get_default_config()
        self._ledger = LedgerSelector(session)
        self._documents = DocumentSelector(session)
        self._vouchers = voucher_service or VoucherService(session, config=self._config)
        self._accounts = account_service or AccountService(session)

    def _summarize(self, company: Company, fiscal_year: int) -> YearEndSummary:
        from_date, to_date = fiscal_year_range(fiscal_year)
        activity = self._ledger.account_activity(
            company.id, from_date, to_date, include_inactive=True
        )

        revenue_fallback = None
        if self._config.invoice_revenue_fallback:
            revenue_fallback = self._documents.paid_sales_excluding_vat(
                company.id, from_date, to_date
            )

        return compute_year_end_summary(
            fiscal_year,
            activity,
            corporate_tax_rate=self._config.corporate_tax_rate,
            is_closed=company.is_year_closed(fiscal_year),
            revenue_fallback=revenue_fallback,
        )

    def year_end_summary(self, company_id: UUID, fiscal_year: int) -> YearEndSummary:
        """
        Result, tax and balance figures for one fiscal year.

        Raises:
            CompanyNotFoundError: No such company.
        """
        return self._summarize(self._get_company(company_id), fiscal_year)

    def tax_calculation(self, company_id: UUID, fiscal_year: int) -> TaxCalculation:
        """
        Corporate tax, VAT and payroll liabilities for the year.  Never mutates.

        Raises:
            CompanyNotFoundError: No such company.
        """
        company = self._get_company(company_id)
        summary = self._summarize(company, fiscal_year)
        from_date, to_date = fiscal_year_range(fiscal_year)

        output_vat = sum_in_range(
            self._documents.output_vat_items(company_id, from_date, to_date), from_date, to_date
        )
        input_vat = sum_in_range(
            self._documents.input_vat_items(company_id, from_date, to_date), from_date, to_date
        )
        payroll = self._documents.payroll_totals(company_id, fiscal_year)

        return compute_tax_calculation(
            summary,
            output_vat,
            input_vat,
            payroll,
            corporate_tax_rate=self._config.corporate_tax_rate,
            employer_contribution_rate=self._config.employer_contribution_rate,
        )

    def close_year(self, company_id: UUID, fiscal_year: int) -> CloseYearResult:
        """
        Close the company's current fiscal year.

        Steps, all inside the caller's transaction:
            1. Lock the company row and check fiscal_year is the open year.
            2. Compute the net result.
            3. If non-zero, ensure the closing accounts exist and post the
               closing voucher dated Dec 31.
            4. Advance current_fiscal_year by one.

        Raises:
            CompanyNotFoundError: No such company.
            AlreadyClosedError: fiscal_year is before the open year.
            PriorYearOpenError: fiscal_year is after the open year.
        """
        company = self._get_company(company_id, lock=True)

        with LogContext.bind(company_id=company_id, fiscal_year=fiscal_year):
            if fiscal_year < company.current_fiscal_year:
                logger.warning(
                    "year_close_rejected",
                    extra={"reason": "already_closed", "current_fiscal_year": company.current_fiscal_year},
                )
                raise AlreadyClosedError(fiscal_year, company.current_fiscal_year)
            if fiscal_year > company.current_fiscal_year:
                logger.warning(
                    "year_close_rejected",
                    extra={"reason": "prior_year_open", "current_fiscal_year": company.current_fiscal_year},
                )
                raise PriorYearOpenError(fiscal_year, company.current_fiscal_year)

            summary = self._summarize(company, fiscal_year)
            net_result = summary.net_result

            closing_voucher_number = None
            if net_result != 0:
                result_account = self._accounts.ensure_account(
                    company_id,
                    self._config.result_account_number,
                    self._config.result_account_name,
                    AccountType.LIABILITY,
                )
                retained_account = self._accounts.ensure_account(
                    company_id,
                    self._config.retained_earnings_account_number,
                    self._config.retained_earnings_account_name,
                    AccountType.LIABILITY,
                )
                voucher = self._vouchers.post_voucher(
                    company_id,
                    voucher_date=summary.to_date,
                    description=closing_description(fiscal_year),
                    rows=closing_rows(net_result, result_account.id, retained_account.id),
                    voucher_type=VoucherType.OTHER,
                )
                closing_voucher_number = voucher.voucher_number

            company.current_fiscal_year = fiscal_year + 1
            self.session.flush()

            logger.info(
                "fiscal_year_closed",
                extra={
                    "net_result": net_result,
                    "corporate_tax": summary.corporate_tax,
                    "closing_voucher_number": closing_voucher_number,
                    "new_fiscal_year": company.current_fiscal_year,
                },
            )

        return CloseYearResult(
            success=True,
            message=f"Fiscal year {fiscal_year} is now closed",
            new_fiscal_year=fiscal_year + 1,
            closing_voucher_number=closing_voucher_number,
            net_result=net_result,
        )
