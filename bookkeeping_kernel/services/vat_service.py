"""
VatService -- VAT period reconciliation.

Responsibility:
    Compute per-period VAT figures live from sales and purchase documents
    and track which periods have been paid.

Invariants enforced:
    - Period figures are always recomputed from documents; the stored
      VatPeriod snapshot is written for history only.
    - At most one VatPeriod record per (company, year, period, period_type).
    - Unmarking clears payment state (is_paid, paid_at, paid_amount) but
      keeps the reference and notes.

Failure modes:
    - InvalidVatPeriodError for a period index outside the type's range.
    - CompanyNotFoundError when the company's default cadence is needed
      and the company does not exist.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookkeeping_kernel.domain.clock import Clock, SystemClock
from bookkeeping_kernel.domain.dtos import MarkVatPaidRequest, VatPeriodInfo, VatSummary
from bookkeeping_kernel.domain.vat_periods import (
    build_vat_summary,
    period_dates,
    period_name,
    sum_in_range,
)
from bookkeeping_kernel.logging_config import get_logger
from bookkeeping_kernel.models.vat_period import VatPeriod, VatPeriodType
from bookkeeping_kernel.selectors.document_selector import DocumentSelector
from bookkeeping_kernel.services.base import BaseService

logger = get_logger("services.vat")


def _record_to_dto(record: VatPeriod) -> VatPeriodInfo:
    from_date, to_date = period_dates(record.year, record.period, record.period_type)
    return VatPeriodInfo(
        year=record.year,
        period=record.period,
        period_type=VatPeriodType(record.period_type),
        period_name=period_name(record.period, record.period_type),
        from_date=from_date,
        to_date=to_date,
        output_vat=record.output_vat,
        input_vat=record.input_vat,
        vat_to_pay=record.vat_to_pay,
        is_paid=record.is_paid,
        paid_at=record.paid_at,
        paid_amount=record.paid_amount,
        payment_reference=record.payment_reference,
        notes=record.notes,
    )


class VatService(BaseService[VatPeriod]):
    """Service for VAT period summaries and payment marking."""

    def __init__(self, session: Session, clock: Clock | None = None):
        super().__init__(session)
        self._clock = clock or SystemClock()
        self._documents = DocumentSelector(session)

    def _find_record(
        self, company_id: UUID, year: int, period: int, period_type: VatPeriodType
    ) -> VatPeriod | None:
        return self.session.execute(
            select(VatPeriod).where(
                VatPeriod.company_id == company_id,
                VatPeriod.year == year,
                VatPeriod.period == period,
                VatPeriod.period_type == VatPeriodType(period_type).value,
            )
        ).scalar_one_or_none()

    def vat_summary(
        self,
        company_id: UUID,
        year: int,
        period_type: VatPeriodType | None = None,
    ) -> VatSummary:
        """
        Every period of the year with live figures and payment state.

        period_type defaults to the company's configured cadence.
        """
        if period_type is None:
            period_type = self._get_company(company_id).vat_period_type
        period_type = VatPeriodType(period_type)

        year_start, year_end = period_dates(year, 1, VatPeriodType.YEARLY)
        output_items = self._documents.output_vat_items(company_id, year_start, year_end)
        input_items = self._documents.input_vat_items(company_id, year_start, year_end)

        records = self.session.execute(
            select(VatPeriod).where(
                VatPeriod.company_id == company_id,
                VatPeriod.year == year,
                VatPeriod.period_type == period_type.value,
            )
        ).scalars()

        return build_vat_summary(
            year,
            period_type,
            output_items,
            input_items,
            {record.period: record for record in records},
        )

    def mark_as_paid(self, company_id: UUID, request: MarkVatPaidRequest) -> VatPeriodInfo:
        """
        Record a period as paid with a snapshot of its current figures.

        paid_amount defaults to the computed VAT to pay; paid_at is taken
        from the clock.  Marking an already-paid period overwrites it.

        Raises:
            InvalidVatPeriodError: period outside 1..N for the type.
            CompanyNotFoundError: No such company.
        """
        self._get_company(company_id)
        period_type = VatPeriodType(request.period_type)
        from_date, to_date = period_dates(request.year, request.period, period_type)

        output_vat = sum_in_range(
            self._documents.output_vat_items(company_id, from_date, to_date), from_date, to_date
        )
        input_vat = sum_in_range(
            self._documents.input_vat_items(company_id, from_date, to_date), from_date, to_date
        )
        vat_to_pay = output_vat - input_vat

        record = self._find_record(company_id, request.year, request.period, period_type)
        if record is None:
            record = VatPeriod(
                company_id=company_id,
                year=request.year,
                period=request.period,
                period_type=period_type.value,
            )
            self.session.add(record)

        record.output_vat = output_vat
        record.input_vat = input_vat
        record.vat_to_pay = vat_to_pay
        record.is_paid = True
        record.paid_at = self._clock.now()
        record.paid_amount = request.paid_amount if request.paid_amount is not None else vat_to_pay
        record.payment_reference = request.payment_reference
        record.notes = request.notes
        self.session.flush()

        logger.info(
            "vat_period_marked_paid",
            extra={
                "company_id": str(company_id),
                "year": request.year,
                "period": request.period,
                "period_type": period_type.value,
                "vat_to_pay": vat_to_pay,
                "paid_amount": record.paid_amount,
            },
        )
        return _record_to_dto(record)

    def unmark_as_paid(
        self, company_id: UUID, year: int, period: int, period_type: VatPeriodType
    ) -> bool:
        """
        Clear the paid state of a period.

        Returns:
            False if the period was never marked.
        """
        record = self._find_record(company_id, year, period, period_type)
        if record is None:
            return False

        record.is_paid = False
        record.paid_at = None
        record.paid_amount = None
        self.session.flush()

        logger.info(
            "vat_period_unmarked",
            extra={
                "company_id": str(company_id),
                "year": year,
                "period": period,
                "period_type": VatPeriodType(period_type).value,
            },
        )
        return True
