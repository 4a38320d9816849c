"""
CompanyLedger -- company-scoped entry point to the bookkeeping kernel.

Every public method runs in its own transaction (session_scope): it commits
on success and rolls back on any exception, so a rejected voucher or a
failed year-end close leaves no partial state behind.  Every call is bound
to one company; nothing here can read or write another tenant's data.

Usage:
    init_engine_from_url("postgresql://...")
    create_tables()

    ledger = CompanyLedger.create_company("Acme AB", fiscal_year=2024)
    bank = ledger.find_account("1930")
    sales = ledger.find_account("3001")
    ledger.post_voucher(
        date(2024, 3, 1),
        "Consulting",
        [VoucherRowInput(bank.id, debit=Decimal("1000")),
         VoucherRowInput(sales.id, credit=Decimal("1000"))],
    )
"""

from collections.abc import Generator, Sequence
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy.orm import Session, sessionmaker

from bookkeeping_kernel.config.loader import get_default_config
from bookkeeping_kernel.config.schema import BookkeepingConfig
from bookkeeping_kernel.db.engine import session_scope
from bookkeeping_kernel.domain.clock import Clock, SystemClock
from bookkeeping_kernel.domain.dtos import (
    AccountBalance,
    AccountInfo,
    BalanceSheet,
    CloseYearResult,
    CompanyInfo,
    IncomeStatement,
    LedgerTotals,
    MarkVatPaidRequest,
    TaxCalculation,
    VatPeriodInfo,
    VatReport,
    VatSummary,
    VoucherInfo,
    VoucherRowInput,
    VoucherSummary,
    YearEndSummary,
)
from bookkeeping_kernel.exceptions import CompanyNotFoundError, NotFoundError, StateConflictError
from bookkeeping_kernel.logging_config import LogContext, get_logger
from bookkeeping_kernel.models.account import AccountType
from bookkeeping_kernel.models.documents import PurchaseDocumentStatus, SalesDocumentStatus
from bookkeeping_kernel.models.vat_period import VatPeriodType
from bookkeeping_kernel.models.voucher import VoucherType
from bookkeeping_kernel.selectors.voucher_selector import VoucherSelector
from bookkeeping_kernel.services.account_service import AccountService
from bookkeeping_kernel.services.company_service import CompanyService
from bookkeeping_kernel.services.document_service import DocumentService
from bookkeeping_kernel.services.report_service import ReportService
from bookkeeping_kernel.services.vat_service import VatService
from bookkeeping_kernel.services.voucher_service import VoucherService
from bookkeeping_kernel.services.year_end_service import YearEndService

logger = get_logger("api")


class CompanyLedger:
    """
    All bookkeeping operations for one company.

    Contract:
        Validation failures raise the typed exceptions from
        bookkeeping_kernel.exceptions.  Lookups return None (or False for
        deletes) when the entity does not belong to the company.
        close_year() never raises for business-rule failures; it returns
        a CloseYearResult with success=False and the error code.
    """

    def __init__(
        self,
        company_id: UUID,
        session_factory: sessionmaker[Session] | None = None,
        clock: Clock | None = None,
        config: BookkeepingConfig | None = None,
    ):
        self.company_id = company_id
        self._session_factory = session_factory
        self._clock = clock or SystemClock()
        self._config = config or get_default_config()

    @classmethod
    def create_company(
        cls,
        name: str,
        organization_number: str | None = None,
        fiscal_year: int | None = None,
        vat_period_type: VatPeriodType | None = None,
        *,
        session_factory: sessionmaker[Session] | None = None,
        clock: Clock | None = None,
        config: BookkeepingConfig | None = None,
    ) -> "CompanyLedger":
        """Create a company with the seeded chart and return its ledger."""
        clock = clock or SystemClock()
        config = config or get_default_config()
        with session_scope(session_factory) as session:
            company = CompanyService(session, clock=clock, config=config).create_company(
                name,
                organization_number=organization_number,
                fiscal_year=fiscal_year,
                vat_period_type=vat_period_type,
            )
        return cls(company.id, session_factory=session_factory, clock=clock, config=config)

    @contextmanager
    def _scope(self) -> Generator[Session, None, None]:
        with LogContext.bind(company_id=self.company_id):
            with session_scope(self._session_factory) as session:
                yield session

    # =========================================================================
    # Company
    # =========================================================================

    def company(self) -> CompanyInfo | None:
        with self._scope() as session:
            return CompanyService(session, self._clock, self._config).get_company(self.company_id)

    def set_vat_period_type(self, period_type: VatPeriodType) -> CompanyInfo:
        with self._scope() as session:
            return CompanyService(session, self._clock, self._config).set_vat_period_type(
                self.company_id, period_type
            )

    # =========================================================================
    # Chart of accounts
    # =========================================================================

    def create_account(
        self, account_number: str, name: str, account_type: AccountType
    ) -> AccountInfo:
        with self._scope() as session:
            return AccountService(session).create_account(
                self.company_id, account_number, name, account_type
            )

    def get_account(self, account_id: UUID) -> AccountInfo | None:
        with self._scope() as session:
            return AccountService(session).get_account(self.company_id, account_id)

    def find_account(self, account_number: str) -> AccountInfo | None:
        """Active or inactive account by number."""
        for account in self.list_accounts(include_inactive=True):
            if account.account_number == account_number:
                return account
        return None

    def list_accounts(self, include_inactive: bool = False) -> list[AccountInfo]:
        with self._scope() as session:
            return AccountService(session).list_accounts(self.company_id, include_inactive)

    def delete_account(self, account_id: UUID) -> bool:
        with self._scope() as session:
            return AccountService(session).delete_account(self.company_id, account_id)

    # =========================================================================
    # Vouchers
    # =========================================================================

    def post_voucher(
        self,
        voucher_date: date,
        description: str,
        rows: Sequence[VoucherRowInput],
        voucher_type: VoucherType = VoucherType.MANUAL,
    ) -> VoucherInfo:
        with self._scope() as session:
            return VoucherService(session, config=self._config).post_voucher(
                self.company_id, voucher_date, description, rows, voucher_type
            )

    def get_voucher(self, voucher_id: UUID) -> VoucherInfo | None:
        with self._scope() as session:
            return VoucherSelector(session).get_voucher(self.company_id, voucher_id)

    def list_vouchers(self) -> list[VoucherSummary]:
        with self._scope() as session:
            return VoucherSelector(session).list_vouchers(self.company_id)

    def delete_voucher(self, voucher_id: UUID) -> bool:
        with self._scope() as session:
            return VoucherService(session, config=self._config).delete_voucher(
                self.company_id, voucher_id
            )

    # =========================================================================
    # Balances and statements
    # =========================================================================

    def _reports(self, session: Session) -> ReportService:
        return ReportService(session, clock=self._clock, config=self._config)

    def account_balances(self, as_of_date: date | None = None) -> list[AccountBalance]:
        with self._scope() as session:
            return self._reports(session).account_balances(self.company_id, as_of_date)

    def income_statement(self, from_date: date, to_date: date) -> IncomeStatement:
        with self._scope() as session:
            return self._reports(session).income_statement(self.company_id, from_date, to_date)

    def balance_sheet(self, as_of_date: date) -> BalanceSheet:
        with self._scope() as session:
            return self._reports(session).balance_sheet(self.company_id, as_of_date)

    def vat_report(self, from_date: date, to_date: date) -> VatReport:
        with self._scope() as session:
            return self._reports(session).vat_report(self.company_id, from_date, to_date)

    def ledger_totals(self, as_of_date: date | None = None) -> LedgerTotals:
        with self._scope() as session:
            return self._reports(session).ledger_totals(self.company_id, as_of_date)

    # =========================================================================
    # VAT periods
    # =========================================================================

    def vat_summary(self, year: int, period_type: VatPeriodType | None = None) -> VatSummary:
        with self._scope() as session:
            return VatService(session, clock=self._clock).vat_summary(
                self.company_id, year, period_type
            )

    def mark_vat_paid(self, request: MarkVatPaidRequest) -> VatPeriodInfo:
        with self._scope() as session:
            return VatService(session, clock=self._clock).mark_as_paid(self.company_id, request)

    def unmark_vat_paid(self, year: int, period: int, period_type: VatPeriodType) -> bool:
        with self._scope() as session:
            return VatService(session, clock=self._clock).unmark_as_paid(
                self.company_id, year, period, period_type
            )

    # =========================================================================
    # Year end
    # =========================================================================

    def year_end_summary(self, fiscal_year: int) -> YearEndSummary | None:
        try:
            with self._scope() as session:
                return YearEndService(session, config=self._config).year_end_summary(
                    self.company_id, fiscal_year
                )
        except CompanyNotFoundError:
            return None

    def tax_calculation(self, fiscal_year: int) -> TaxCalculation | None:
        try:
            with self._scope() as session:
                return YearEndService(session, config=self._config).tax_calculation(
                    self.company_id, fiscal_year
                )
        except CompanyNotFoundError:
            return None

    def close_year(self, fiscal_year: int) -> CloseYearResult:
        """Close fiscal_year.  Business-rule failures come back as success=False."""
        try:
            with self._scope() as session:
                return YearEndService(session, config=self._config).close_year(
                    self.company_id, fiscal_year
                )
        except (NotFoundError, StateConflictError) as exc:
            return CloseYearResult(success=False, message=exc.message, code=exc.code)

    # =========================================================================
    # Source documents
    # =========================================================================

    def record_sales_document(
        self,
        document_date: date,
        amount_excluding_vat: Decimal,
        vat_amount: Decimal,
        status: SalesDocumentStatus = SalesDocumentStatus.SENT,
        document_number: str | None = None,
    ) -> UUID:
        with self._scope() as session:
            return DocumentService(session).record_sales_document(
                self.company_id,
                document_date,
                amount_excluding_vat,
                vat_amount,
                status=status,
                document_number=document_number,
            )

    def record_purchase_document(
        self,
        document_date: date,
        amount: Decimal,
        vat_amount: Decimal,
        status: PurchaseDocumentStatus = PurchaseDocumentStatus.SUBMITTED,
        description: str | None = None,
    ) -> UUID:
        with self._scope() as session:
            return DocumentService(session).record_purchase_document(
                self.company_id,
                document_date,
                amount,
                vat_amount,
                status=status,
                description=description,
            )

    def set_sales_status(self, document_id: UUID, status: SalesDocumentStatus) -> bool:
        with self._scope() as session:
            return DocumentService(session).set_sales_status(self.company_id, document_id, status)

    def set_purchase_status(self, document_id: UUID, status: PurchaseDocumentStatus) -> bool:
        with self._scope() as session:
            return DocumentService(session).set_purchase_status(
                self.company_id, document_id, status
            )

    def record_payroll(
        self,
        year: int,
        month: int,
        gross_salary: Decimal,
        tax_amount: Decimal,
        employer_contribution: Decimal,
        employee_name: str | None = None,
    ) -> UUID:
        with self._scope() as session:
            return DocumentService(session).record_payroll(
                self.company_id,
                year,
                month,
                gross_salary,
                tax_amount,
                employer_contribution,
                employee_name=employee_name,
            )
