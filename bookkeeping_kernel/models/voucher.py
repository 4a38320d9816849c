"""
Module: bookkeeping_kernel.models.voucher
Responsibility: ORM persistence for vouchers (the balanced, numbered unit of
    bookkeeping) and their debit/credit rows.
Architecture position: Kernel > Models.  May import from db/base.py and
    sibling model modules only.

Invariants enforced:
    - (company_id, voucher_number) is unique (uq_voucher_company_number).
      Numbers are allocated under the company row lock; the constraint is
      the backstop for racing writers.
    - Sum of row debits equals sum of row credits (checked by VoucherService
      before the voucher is created; exposed read-side by is_balanced).
    - Rows are deleted with their voucher (cascade), never on their own.

Failure modes:
    - IntegrityError on uq_voucher_company_number when two writers race
      past the numbering lock.  Callers retry the whole posting.

Audit relevance:
    Vouchers are the only source of ledger truth.  Balances, statements and
    VAT figures are always derived from these rows.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookkeeping_kernel.db.base import TrackedBase, UUIDString

if TYPE_CHECKING:
    from bookkeeping_kernel.models.account import Account


class VoucherType(str, Enum):
    """Business origin of a voucher."""

    MANUAL = "manual"
    INVOICE = "invoice"
    PAYMENT = "payment"
    SALARY = "salary"
    OTHER = "other"


class Voucher(TrackedBase):
    """
    A balanced, sequentially numbered bookkeeping record.

    Guarantees:
        - voucher_number is a zero-padded decimal string unique per company.
        - rows are ordered by sort_order (0..n-1, input order).
    """

    __tablename__ = "vouchers"

    __table_args__ = (
        UniqueConstraint("company_id", "voucher_number", name="uq_voucher_company_number"),
        Index("idx_voucher_company_date", "company_id", "voucher_date"),
    )

    company_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("companies.id"),
        nullable=False,
    )

    voucher_number: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )

    # Accounting date; decides period and fiscal-year membership
    voucher_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )

    description: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
    )

    voucher_type: Mapped[VoucherType] = mapped_column(
        String(20),
        nullable=False,
        default=VoucherType.MANUAL.value,
    )

    # Relationships
    rows: Mapped[list["VoucherRow"]] = relationship(
        back_populates="voucher",
        cascade="all, delete-orphan",
        order_by="VoucherRow.sort_order",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Voucher {self.voucher_number} {self.voucher_date}>"

    @property
    def total_debit(self) -> Decimal:
        """Sum of all row debits."""
        return sum((row.debit for row in self.rows), Decimal("0"))

    @property
    def total_credit(self) -> Decimal:
        """Sum of all row credits."""
        return sum((row.credit for row in self.rows), Decimal("0"))

    @property
    def is_balanced(self) -> bool:
        """Postconditions: Returns True iff total_debit == total_credit."""
        return self.total_debit == self.total_credit


class VoucherRow(TrackedBase):
    """
    One debit and/or credit posting against an account.

    A row usually carries a non-zero amount on one side only, but nothing
    here forbids both sides being set.
    """

    __tablename__ = "voucher_rows"

    __table_args__ = (
        Index("idx_voucher_row_voucher", "voucher_id"),
        Index("idx_voucher_row_account", "account_id"),
    )

    voucher_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("vouchers.id", ondelete="CASCADE"),
        nullable=False,
    )

    account_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("accounts.id"),
        nullable=False,
    )

    debit: Mapped[Decimal] = mapped_column(
        Numeric(19, 4),
        nullable=False,
        default=Decimal("0"),
    )

    credit: Mapped[Decimal] = mapped_column(
        Numeric(19, 4),
        nullable=False,
        default=Decimal("0"),
    )

    description: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )

    # Position within the voucher (input order)
    sort_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # Relationships
    voucher: Mapped["Voucher"] = relationship(
        back_populates="rows",
    )

    account: Mapped["Account"] = relationship(
        back_populates="voucher_rows",
    )

    def __repr__(self) -> str:
        return f"<VoucherRow D{self.debit} C{self.credit}>"
