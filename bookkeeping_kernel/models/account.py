"""
Module: bookkeeping_kernel.models.account
Responsibility: ORM persistence for the per-company chart of accounts -- the
    target of every voucher row.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - (company_id, account_number) is unique (uq_account_company_number).
    - Inactive accounts stay in the table so historical voucher rows keep
      their reference; they are excluded from new postings and balances.

Failure modes:
    - AccountNumberExistsError when a duplicate number is created.
    - InvalidAccountReferenceError when a posting targets an account outside
      the company or an inactive account.

Audit relevance:
    An account referenced by any voucher row is never hard-deleted; deletion
    requests deactivate it instead.
"""

from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookkeeping_kernel.db.base import TrackedBase, UUIDString

if TYPE_CHECKING:
    from bookkeeping_kernel.models.company import Company
    from bookkeeping_kernel.models.voucher import VoucherRow


class AccountType(str, Enum):
    """Classification that decides statement placement and sign convention."""

    ASSET = "asset"
    LIABILITY = "liability"
    REVENUE = "revenue"
    EXPENSE = "expense"
    FINANCIAL_INCOME = "financial_income"
    FINANCIAL_EXPENSE = "financial_expense"


class Account(TrackedBase):
    """
    Chart of accounts entry for one company.

    Contract:
        account_number is unique within the company.  The number is the
        ordering key for every balance listing and statement section.
    """

    __tablename__ = "accounts"

    __table_args__ = (
        UniqueConstraint("company_id", "account_number", name="uq_account_company_number"),
        Index("idx_account_company_active", "company_id", "is_active"),
    )

    company_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("companies.id"),
        nullable=False,
    )

    # Human-readable account number, e.g. "1930"
    account_number: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    account_type: Mapped[AccountType] = mapped_column(
        String(30),
        nullable=False,
    )

    # Whether the account is open for new postings
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    # Relationships
    company: Mapped["Company"] = relationship(
        back_populates="accounts",
    )

    voucher_rows: Mapped[list["VoucherRow"]] = relationship(
        back_populates="account",
        lazy="dynamic",
    )

    def __repr__(self) -> str:
        return f"<Account {self.account_number}: {self.name}>"

    @property
    def type(self) -> AccountType:
        """account_type coerced back to the enum (the column stores its value)."""
        return AccountType(self.account_type)
