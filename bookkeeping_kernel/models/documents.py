"""
Module: bookkeeping_kernel.models.documents
Responsibility: Source documents that feed VAT reconciliation and year-end
    tax figures: sales documents (invoices), purchase documents (expenses)
    and payroll records.
Architecture position: Kernel > Models.  May import from db/base.py only.

These rows are inputs only.  The ledger never derives balances from them;
they are read by VAT and tax calculations.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from bookkeeping_kernel.db.base import TrackedBase, UUIDString


class SalesDocumentStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class PurchaseDocumentStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    PAID = "paid"
    REJECTED = "rejected"


class SalesDocument(TrackedBase):
    """An issued invoice.  Its VAT is output VAT."""

    __tablename__ = "sales_documents"

    __table_args__ = (
        Index("idx_sales_document_company_date", "company_id", "document_date"),
    )

    company_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("companies.id"),
        nullable=False,
    )

    document_number: Mapped[str | None] = mapped_column(String(50), nullable=True)

    document_date: Mapped[date] = mapped_column(Date, nullable=False)

    amount_excluding_vat: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )

    vat_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )

    status: Mapped[SalesDocumentStatus] = mapped_column(
        String(20),
        nullable=False,
        default=SalesDocumentStatus.DRAFT.value,
    )

    def __repr__(self) -> str:
        return f"<SalesDocument {self.document_number} {self.document_date}>"

    @property
    def total_including_vat(self) -> Decimal:
        return self.amount_excluding_vat + self.vat_amount


class PurchaseDocument(TrackedBase):
    """A received expense.  Its VAT is input VAT once paid."""

    __tablename__ = "purchase_documents"

    __table_args__ = (
        Index("idx_purchase_document_company_date", "company_id", "document_date"),
    )

    company_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("companies.id"),
        nullable=False,
    )

    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    document_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Total including VAT
    amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )

    vat_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )

    status: Mapped[PurchaseDocumentStatus] = mapped_column(
        String(20),
        nullable=False,
        default=PurchaseDocumentStatus.DRAFT.value,
    )

    def __repr__(self) -> str:
        return f"<PurchaseDocument {self.document_date} {self.amount}>"


class PayrollRecord(TrackedBase):
    """Monthly payroll totals for one employee."""

    __tablename__ = "payroll_records"

    __table_args__ = (
        Index("idx_payroll_company_year", "company_id", "year"),
    )

    company_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("companies.id"),
        nullable=False,
    )

    employee_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)

    gross_salary: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )

    # Preliminary income tax withheld from the employee
    tax_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )

    employer_contribution: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )

    def __repr__(self) -> str:
        return f"<PayrollRecord {self.year}-{self.month:02d} {self.gross_salary}>"
