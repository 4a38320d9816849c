"""
Module: bookkeeping_kernel.models.company
Responsibility: ORM persistence for the Company -- the tenant that owns a
    chart of accounts, a voucher log, VAT period records, and the open
    fiscal-year marker.
Architecture position: Kernel > Models.  May import from db/base.py and
    sibling model modules only.

Invariants enforced:
    - current_fiscal_year only moves forward, and only by exactly one per
      successful year-end close (enforced by YearEndService).
    - Every fiscal year strictly before current_fiscal_year is closed.

Audit relevance:
    The company row is the lock target for voucher numbering and year-end
    closing.  Serializing on it guarantees gap-free, collision-free voucher
    numbers and a single close per fiscal year.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookkeeping_kernel.db.base import TrackedBase
from bookkeeping_kernel.models.vat_period import VatPeriodType

if TYPE_CHECKING:
    from bookkeeping_kernel.models.account import Account


class Company(TrackedBase):
    """
    A bookkeeping tenant.

    Guarantees:
        - current_fiscal_year is the single open fiscal year.
        - vat_period_type is the default reporting frequency for VAT.
    """

    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Registration number, free-form
    organization_number: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
    )

    # The open fiscal year; all earlier years are closed
    current_fiscal_year: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    vat_period_type: Mapped[VatPeriodType] = mapped_column(
        String(20),
        nullable=False,
        default=VatPeriodType.QUARTERLY.value,
    )

    accounts: Mapped[list["Account"]] = relationship(
        back_populates="company",
        lazy="dynamic",
    )

    def __repr__(self) -> str:
        return f"<Company {self.name} fy={self.current_fiscal_year}>"

    def is_year_closed(self, fiscal_year: int) -> bool:
        """Postconditions: Returns True iff fiscal_year < current_fiscal_year."""
        return fiscal_year < self.current_fiscal_year
