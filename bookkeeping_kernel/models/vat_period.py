"""
Module: bookkeeping_kernel.models.vat_period
Responsibility: ORM persistence for VAT period payment snapshots.
Architecture position: Kernel > Models.  May import from db/base.py only.

A record exists only once a period has been marked as paid at least once.
The VAT figures it stores are a snapshot taken at marking time; reports
always recompute live figures from the source documents.

Invariants enforced:
    - (company_id, year, period, period_type) is unique (uq_vat_period_key).
    - paid_at and paid_amount are NULL whenever is_paid is False.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from bookkeeping_kernel.db.base import TrackedBase, UUIDString


class VatPeriodType(str, Enum):
    """VAT reporting frequency."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class VatPeriod(TrackedBase):
    """Payment state and figure snapshot for one VAT period."""

    __tablename__ = "vat_periods"

    __table_args__ = (
        UniqueConstraint(
            "company_id", "year", "period", "period_type", name="uq_vat_period_key"
        ),
    )

    company_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("companies.id"),
        nullable=False,
    )

    year: Mapped[int] = mapped_column(Integer, nullable=False)

    # 1-based index within the year
    period: Mapped[int] = mapped_column(Integer, nullable=False)

    period_type: Mapped[VatPeriodType] = mapped_column(
        String(20),
        nullable=False,
    )

    # Snapshot at marking time
    output_vat: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    input_vat: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    vat_to_pay: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )

    is_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    paid_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    paid_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(19, 4),
        nullable=True,
    )

    payment_reference: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    notes: Mapped[str | None] = mapped_column(
        String(1000),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<VatPeriod {self.year}/{self.period} {self.period_type} paid={self.is_paid}>"
