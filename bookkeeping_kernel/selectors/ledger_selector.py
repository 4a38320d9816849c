"""
Module: bookkeeping_kernel.selectors.ledger_selector
Responsibility: Read-only balance aggregation over voucher rows.  The ledger
    is a derived view: there are no stored balances anywhere.
Architecture position: Kernel > Selectors.  May import from models/, domain
    DTOs, and selectors/base.py.

Invariants enforced:
    - Every balance is summed from VoucherRow at query time.
    - Sum of all debits equals sum of all credits for a company, as of any
      date (read-side check via ledger_totals()).

Failure modes:
    - Accounts with no activity in the window are returned with zero totals,
      never omitted.
"""

from datetime import date
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookkeeping_kernel.db.types import to_decimal
from bookkeeping_kernel.domain.dtos import AccountBalance, LedgerTotals
from bookkeeping_kernel.models.account import Account, AccountType
from bookkeeping_kernel.models.voucher import Voucher, VoucherRow
from bookkeeping_kernel.selectors.base import BaseSelector


class LedgerSelector(BaseSelector[VoucherRow]):
    """
    Selector for balance queries.

    Contract:
        Windows are inclusive on both ends.  A missing bound means
        unbounded on that side.  Results are ordered by account number.
    """

    def __init__(self, session: Session):
        super().__init__(session)

    def account_activity(
        self,
        company_id: UUID,
        from_date: date | None = None,
        to_date: date | None = None,
        include_inactive: bool = False,
    ) -> list[AccountBalance]:
        """
        Debit and credit totals per account for vouchers dated in the window.

        Args:
            company_id: Company whose chart and vouchers are read.
            from_date: First voucher date included.
            to_date: Last voucher date included.
            include_inactive: Also report deactivated accounts.

        Returns:
            One AccountBalance per account, zero totals where no rows match.
        """
        totals = (
            select(
                VoucherRow.account_id.label("account_id"),
                func.sum(VoucherRow.debit).label("debit_total"),
                func.sum(VoucherRow.credit).label("credit_total"),
            )
            .join(Voucher, VoucherRow.voucher_id == Voucher.id)
            .where(Voucher.company_id == company_id)
            .group_by(VoucherRow.account_id)
        )
        if from_date is not None:
            totals = totals.where(Voucher.voucher_date >= from_date)
        if to_date is not None:
            totals = totals.where(Voucher.voucher_date <= to_date)
        totals = totals.subquery()

        query = (
            select(
                Account.id,
                Account.account_number,
                Account.name,
                Account.account_type,
                totals.c.debit_total,
                totals.c.credit_total,
            )
            .outerjoin(totals, totals.c.account_id == Account.id)
            .where(Account.company_id == company_id)
            .order_by(Account.account_number)
        )
        if not include_inactive:
            query = query.where(Account.is_active.is_(True))

        return [
            AccountBalance(
                account_id=row.id,
                account_number=row.account_number,
                account_name=row.name,
                account_type=AccountType(row.account_type),
                debit=to_decimal(row.debit_total),
                credit=to_decimal(row.credit_total),
            )
            for row in self.session.execute(query).all()
        ]

    def account_balances(self, company_id: UUID, as_of_date: date) -> list[AccountBalance]:
        """Cumulative balances of active accounts up to and including as_of_date."""
        return self.account_activity(company_id, to_date=as_of_date)

    def ledger_totals(self, company_id: UUID, as_of_date: date | None = None) -> LedgerTotals:
        """Total debits and credits across every voucher row of the company."""
        query = (
            select(
                func.sum(VoucherRow.debit).label("debit_total"),
                func.sum(VoucherRow.credit).label("credit_total"),
            )
            .join(Voucher, VoucherRow.voucher_id == Voucher.id)
            .where(Voucher.company_id == company_id)
        )
        if as_of_date is not None:
            query = query.where(Voucher.voucher_date <= as_of_date)

        row = self.session.execute(query).one()
        return LedgerTotals(
            total_debit=to_decimal(row.debit_total),
            total_credit=to_decimal(row.credit_total),
        )

    def is_account_referenced(self, account_id: UUID) -> bool:
        """True if any voucher row points at the account."""
        query = select(VoucherRow.id).where(VoucherRow.account_id == account_id).limit(1)
        return self.session.execute(query).first() is not None
