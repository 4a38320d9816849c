"""
Module: bookkeeping_kernel.selectors.document_selector
Responsibility: Read-only access to the source documents feeding VAT and
    tax figures: sales documents, purchase documents and payroll records.
Architecture position: Kernel > Selectors.

Output VAT counts every sales document dated in the window regardless of
status.  Input VAT counts only purchase documents in status PAID.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookkeeping_kernel.db.types import to_decimal
from bookkeeping_kernel.domain.dtos import PayrollTotals
from bookkeeping_kernel.models.documents import (
    PayrollRecord,
    PurchaseDocument,
    PurchaseDocumentStatus,
    SalesDocument,
    SalesDocumentStatus,
)
from bookkeeping_kernel.selectors.base import BaseSelector


class DocumentSelector(BaseSelector[SalesDocument]):
    """Selector for collaborator documents."""

    def __init__(self, session: Session):
        super().__init__(session)

    def output_vat_items(
        self, company_id: UUID, from_date: date, to_date: date
    ) -> list[tuple[date, Decimal]]:
        """(document_date, vat_amount) of sales documents dated in the window."""
        query = select(SalesDocument.document_date, SalesDocument.vat_amount).where(
            SalesDocument.company_id == company_id,
            SalesDocument.document_date >= from_date,
            SalesDocument.document_date <= to_date,
        )
        return [(row.document_date, row.vat_amount) for row in self.session.execute(query)]

    def input_vat_items(
        self, company_id: UUID, from_date: date, to_date: date
    ) -> list[tuple[date, Decimal]]:
        """(document_date, vat_amount) of paid purchase documents dated in the window."""
        query = select(PurchaseDocument.document_date, PurchaseDocument.vat_amount).where(
            PurchaseDocument.company_id == company_id,
            PurchaseDocument.status == PurchaseDocumentStatus.PAID.value,
            PurchaseDocument.document_date >= from_date,
            PurchaseDocument.document_date <= to_date,
        )
        return [(row.document_date, row.vat_amount) for row in self.session.execute(query)]

    def paid_sales_excluding_vat(
        self, company_id: UUID, from_date: date, to_date: date
    ) -> Decimal:
        """Sum of amount_excluding_vat over paid sales documents in the window."""
        query = select(func.sum(SalesDocument.amount_excluding_vat)).where(
            SalesDocument.company_id == company_id,
            SalesDocument.status == SalesDocumentStatus.PAID.value,
            SalesDocument.document_date >= from_date,
            SalesDocument.document_date <= to_date,
        )
        return to_decimal(self.session.execute(query).scalar())

    def payroll_totals(self, company_id: UUID, year: int) -> PayrollTotals:
        """Gross salaries, employer contributions and withheld tax for the year."""
        query = select(
            func.sum(PayrollRecord.gross_salary).label("gross"),
            func.sum(PayrollRecord.employer_contribution).label("contributions"),
            func.sum(PayrollRecord.tax_amount).label("tax"),
        ).where(
            PayrollRecord.company_id == company_id,
            PayrollRecord.year == year,
        )
        row = self.session.execute(query).one()
        return PayrollTotals(
            gross_salaries=to_decimal(row.gross),
            employer_contributions=to_decimal(row.contributions),
            employee_tax=to_decimal(row.tax),
        )
