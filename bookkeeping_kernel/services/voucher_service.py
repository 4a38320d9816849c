"""
VoucherService -- the posting engine.

Responsibility:
    Validate a requested voucher, allocate its number, and persist it with
    its rows in one flush.  Also deletes vouchers.

Architecture position:
    Kernel > Services.  Uses VoucherNumberService for numbering and
    VoucherSelector for the DTO conversion.

Invariants enforced:
    - A persisted voucher always has sum(debit) == sum(credit).
    - Every row references an active account of the same company.
    - Amounts are non-negative.
    - Nothing is written unless every check passes; the checks run before
      any session.add().
    - Vouchers dated before the company's open fiscal year are rejected.
      The year-end close posts its closing voucher before advancing the
      open year, so it never trips this check.

Failure modes:
    - EmptyVoucherError, InvalidAmountError, UnbalancedVoucherError,
      InvalidAccountReferenceError (validation).
    - ClosedFiscalYearError (state conflict).
    - CompanyNotFoundError.
    - IntegrityError on uq_voucher_company_number if a concurrent writer
      slips past the numbering lock; the caller may retry.
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookkeeping_kernel.config.loader import get_default_config
from bookkeeping_kernel.config.schema import BookkeepingConfig
from bookkeeping_kernel.domain.dtos import VoucherInfo, VoucherRowInput
from bookkeeping_kernel.exceptions import (
    ClosedFiscalYearError,
    EmptyVoucherError,
    InvalidAccountReferenceError,
    InvalidAmountError,
    UnbalancedVoucherError,
)
from bookkeeping_kernel.logging_config import LogContext, get_logger
from bookkeeping_kernel.models.account import Account
from bookkeeping_kernel.models.voucher import Voucher, VoucherRow, VoucherType
from bookkeeping_kernel.selectors.voucher_selector import voucher_to_dto
from bookkeeping_kernel.services.base import BaseService
from bookkeeping_kernel.services.sequence_service import VoucherNumberService

logger = get_logger("services.voucher")

ZERO = Decimal("0")


def validate_rows(rows: Sequence[VoucherRowInput]) -> tuple[Decimal, Decimal]:
    """
    Check row amounts and balance.

    Returns:
        (total_debit, total_credit)

    Raises:
        EmptyVoucherError, InvalidAmountError, UnbalancedVoucherError
    """
    if not rows:
        raise EmptyVoucherError()

    for index, row in enumerate(rows):
        if row.debit < ZERO or row.credit < ZERO:
            raise InvalidAmountError(index, row.debit, row.credit)

    total_debit = sum((row.debit for row in rows), ZERO)
    total_credit = sum((row.credit for row in rows), ZERO)
    if total_debit != total_credit:
        raise UnbalancedVoucherError(total_debit, total_credit)
    return total_debit, total_credit


class VoucherService(BaseService[Voucher]):
    """
    Service for posting and deleting vouchers.

    Contract:
        post_voucher() flushes but never commits.  A raised exception means
        nothing was added to the session.
    """

    def __init__(
        self,
        session: Session,
        config: BookkeepingConfig | None = None,
        numbering: VoucherNumberService | None = None,
    ):
        super().__init__(session)
        self._config = config or get_default_config()
        self._numbering = numbering or VoucherNumberService(
            session, width=self._config.voucher_number_width
        )

    def _resolve_accounts(
        self, company_id: UUID, rows: Sequence[VoucherRowInput]
    ) -> dict[UUID, Account]:
        requested = {row.account_id for row in rows}
        accounts = {
            account.id: account
            for account in self.session.execute(
                select(Account).where(
                    Account.id.in_(requested),
                    Account.company_id == company_id,
                )
            ).scalars()
        }

        for row in rows:
            account = accounts.get(row.account_id)
            if account is None:
                raise InvalidAccountReferenceError(str(row.account_id))
            if not account.is_active:
                raise InvalidAccountReferenceError(str(row.account_id), "account is inactive")
        return accounts

    def post_voucher(
        self,
        company_id: UUID,
        voucher_date: date,
        description: str,
        rows: Sequence[VoucherRowInput],
        voucher_type: VoucherType = VoucherType.MANUAL,
    ) -> VoucherInfo:
        """
        Validate and persist a voucher.

        Preconditions:
            - rows is in presentation order; sort_order follows it.

        Postconditions:
            - The voucher has the next number for the company and its rows
              are flushed.  The company row is locked until the caller's
              transaction ends.

        Raises:
            EmptyVoucherError, InvalidAmountError, UnbalancedVoucherError,
            InvalidAccountReferenceError, ClosedFiscalYearError,
            CompanyNotFoundError
        """
        try:
            total_debit, _ = validate_rows(rows)
            company = self._get_company(company_id, lock=True)
            accounts = self._resolve_accounts(company_id, rows)
            if company.is_year_closed(voucher_date.year):
                raise ClosedFiscalYearError(voucher_date, company.current_fiscal_year)
        except (
            EmptyVoucherError,
            InvalidAmountError,
            UnbalancedVoucherError,
            InvalidAccountReferenceError,
            ClosedFiscalYearError,
        ) as exc:
            logger.warning(
                "voucher_rejected",
                extra={"company_id": str(company_id), "code": exc.code, "reason": str(exc)},
            )
            raise

        voucher_number = self._numbering.next_number(company_id)

        voucher = Voucher(
            company_id=company_id,
            voucher_number=voucher_number,
            voucher_date=voucher_date,
            description=description,
            voucher_type=VoucherType(voucher_type).value,
        )
        for index, row in enumerate(rows):
            voucher.rows.append(
                VoucherRow(
                    account_id=row.account_id,
                    account=accounts[row.account_id],
                    debit=row.debit,
                    credit=row.credit,
                    description=row.description,
                    sort_order=index,
                )
            )
        self.session.add(voucher)
        self.session.flush()

        with LogContext.bind(voucher_id=voucher.id):
            logger.info(
                "voucher_posted",
                extra={
                    "company_id": str(company_id),
                    "voucher_number": voucher_number,
                    "voucher_date": voucher_date,
                    "voucher_type": voucher.voucher_type,
                    "row_count": len(rows),
                    "total_amount": total_debit,
                },
            )
        return voucher_to_dto(voucher)

    def delete_voucher(self, company_id: UUID, voucher_id: UUID) -> bool:
        """
        Remove a voucher and its rows.

        Returns:
            False if the voucher does not belong to the company.
        """
        voucher = self.session.execute(
            select(Voucher).where(Voucher.id == voucher_id, Voucher.company_id == company_id)
        ).scalar_one_or_none()
        if voucher is None:
            return False

        voucher_number = voucher.voucher_number
        self.session.delete(voucher)
        self.session.flush()

        logger.info(
            "voucher_deleted",
            extra={
                "company_id": str(company_id),
                "voucher_id": str(voucher_id),
                "voucher_number": voucher_number,
            },
        )
        return True
