"""
Module: bookkeeping_kernel.selectors.voucher_selector
Responsibility: Read-only voucher lookups and listings, always scoped to a
    company.
Architecture position: Kernel > Selectors.
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from bookkeeping_kernel.db.types import to_decimal
from bookkeeping_kernel.domain.dtos import VoucherInfo, VoucherRowInfo, VoucherSummary
from bookkeeping_kernel.models.voucher import Voucher, VoucherRow, VoucherType
from bookkeeping_kernel.selectors.base import BaseSelector


def voucher_to_dto(voucher: Voucher) -> VoucherInfo:
    """Convert an ORM voucher (rows and their accounts loaded) to a VoucherInfo."""
    rows = tuple(
        VoucherRowInfo(
            id=row.id,
            account_id=row.account_id,
            account_number=row.account.account_number,
            account_name=row.account.name,
            debit=row.debit,
            credit=row.credit,
            description=row.description,
            sort_order=row.sort_order,
        )
        for row in sorted(voucher.rows, key=lambda r: r.sort_order)
    )
    return VoucherInfo(
        id=voucher.id,
        company_id=voucher.company_id,
        voucher_number=voucher.voucher_number,
        voucher_date=voucher.voucher_date,
        description=voucher.description,
        voucher_type=VoucherType(voucher.voucher_type),
        created_at=voucher.created_at,
        rows=rows,
    )


class VoucherSelector(BaseSelector[Voucher]):
    """Selector for voucher queries."""

    def __init__(self, session: Session):
        super().__init__(session)

    def get_voucher(self, company_id: UUID, voucher_id: UUID) -> VoucherInfo | None:
        """The voucher with its ordered rows, or None if not owned by the company."""
        query = (
            select(Voucher)
            .where(Voucher.id == voucher_id, Voucher.company_id == company_id)
            .options(selectinload(Voucher.rows).joinedload(VoucherRow.account))
        )
        voucher = self.session.execute(query).scalar_one_or_none()
        if voucher is None:
            return None
        return voucher_to_dto(voucher)

    def list_vouchers(self, company_id: UUID) -> list[VoucherSummary]:
        """
        Summaries of every voucher of the company.

        Newest voucher date first; within a date, highest number first.
        total_amount is the debit sum.
        """
        query = (
            select(
                Voucher.id,
                Voucher.voucher_number,
                Voucher.voucher_date,
                Voucher.description,
                Voucher.voucher_type,
                func.sum(VoucherRow.debit).label("total_amount"),
            )
            .outerjoin(VoucherRow, VoucherRow.voucher_id == Voucher.id)
            .where(Voucher.company_id == company_id)
            .group_by(
                Voucher.id,
                Voucher.voucher_number,
                Voucher.voucher_date,
                Voucher.description,
                Voucher.voucher_type,
            )
        )

        summaries = [
            VoucherSummary(
                id=row.id,
                voucher_number=row.voucher_number,
                voucher_date=row.voucher_date,
                description=row.description,
                voucher_type=VoucherType(row.voucher_type),
                total_amount=to_decimal(row.total_amount),
            )
            for row in self.session.execute(query).all()
        ]
        # Numeric sort on the number; string order breaks past the pad width
        summaries.sort(
            key=lambda s: (s.voucher_date, _number_key(s.voucher_number)),
            reverse=True,
        )
        return summaries

    def existing_numbers(self, company_id: UUID) -> list[str]:
        """All voucher numbers the company has used."""
        query = select(Voucher.voucher_number).where(Voucher.company_id == company_id)
        return list(self.session.execute(query).scalars())


def _number_key(voucher_number: str) -> tuple[int, int, str]:
    if voucher_number.isdigit():
        return (1, int(voucher_number), voucher_number)
    return (0, 0, voucher_number)
