"""
DocumentService -- intake of sales, purchase and payroll documents.

The invoice, expense and payroll workflows live outside the kernel.  This
service is the narrow door through which they hand over the figures VAT
and tax calculations need.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookkeeping_kernel.logging_config import get_logger
from bookkeeping_kernel.models.documents import (
    PayrollRecord,
    PurchaseDocument,
    PurchaseDocumentStatus,
    SalesDocument,
    SalesDocumentStatus,
)
from bookkeeping_kernel.services.base import BaseService

logger = get_logger("services.document")


class DocumentService(BaseService[SalesDocument]):
    """Records collaborator documents for a company."""

    def __init__(self, session: Session):
        super().__init__(session)

    def record_sales_document(
        self,
        company_id: UUID,
        document_date: date,
        amount_excluding_vat: Decimal,
        vat_amount: Decimal,
        status: SalesDocumentStatus = SalesDocumentStatus.SENT,
        document_number: str | None = None,
    ) -> UUID:
        self._get_company(company_id)
        document = SalesDocument(
            company_id=company_id,
            document_number=document_number,
            document_date=document_date,
            amount_excluding_vat=amount_excluding_vat,
            vat_amount=vat_amount,
            status=SalesDocumentStatus(status).value,
        )
        self.session.add(document)
        self.session.flush()
        logger.info(
            "sales_document_recorded",
            extra={
                "company_id": str(company_id),
                "document_id": str(document.id),
                "document_date": document_date,
                "vat_amount": vat_amount,
                "status": document.status,
            },
        )
        return document.id

    def record_purchase_document(
        self,
        company_id: UUID,
        document_date: date,
        amount: Decimal,
        vat_amount: Decimal,
        status: PurchaseDocumentStatus = PurchaseDocumentStatus.SUBMITTED,
        description: str | None = None,
    ) -> UUID:
        self._get_company(company_id)
        document = PurchaseDocument(
            company_id=company_id,
            description=description,
            document_date=document_date,
            amount=amount,
            vat_amount=vat_amount,
            status=PurchaseDocumentStatus(status).value,
        )
        self.session.add(document)
        self.session.flush()
        logger.info(
            "purchase_document_recorded",
            extra={
                "company_id": str(company_id),
                "document_id": str(document.id),
                "document_date": document_date,
                "vat_amount": vat_amount,
                "status": document.status,
            },
        )
        return document.id

    def set_sales_status(
        self, company_id: UUID, document_id: UUID, status: SalesDocumentStatus
    ) -> bool:
        """Returns False if the document does not belong to the company."""
        document = self.session.execute(
            select(SalesDocument).where(
                SalesDocument.id == document_id, SalesDocument.company_id == company_id
            )
        ).scalar_one_or_none()
        if document is None:
            return False
        document.status = SalesDocumentStatus(status).value
        self.session.flush()
        logger.info(
            "sales_document_status_changed",
            extra={"document_id": str(document_id), "status": document.status},
        )
        return True

    def set_purchase_status(
        self, company_id: UUID, document_id: UUID, status: PurchaseDocumentStatus
    ) -> bool:
        """Returns False if the document does not belong to the company."""
        document = self.session.execute(
            select(PurchaseDocument).where(
                PurchaseDocument.id == document_id, PurchaseDocument.company_id == company_id
            )
        ).scalar_one_or_none()
        if document is None:
            return False
        document.status = PurchaseDocumentStatus(status).value
        self.session.flush()
        logger.info(
            "purchase_document_status_changed",
            extra={"document_id": str(document_id), "status": document.status},
        )
        return True

    def record_payroll(
        self,
        company_id: UUID,
        year: int,
        month: int,
        gross_salary: Decimal,
        tax_amount: Decimal,
        employer_contribution: Decimal,
        employee_name: str | None = None,
    ) -> UUID:
        if not 1 <= month <= 12:
            raise ValueError(f"month must be 1..12, got {month}")
        self._get_company(company_id)
        record = PayrollRecord(
            company_id=company_id,
            employee_name=employee_name,
            year=year,
            month=month,
            gross_salary=gross_salary,
            tax_amount=tax_amount,
            employer_contribution=employer_contribution,
        )
        self.session.add(record)
        self.session.flush()
        logger.info(
            "payroll_recorded",
            extra={
                "company_id": str(company_id),
                "payroll_year": year,
                "payroll_month": month,
                "gross_salary": gross_salary,
            },
        )
        return record.id
