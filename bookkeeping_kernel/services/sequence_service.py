"""
VoucherNumberService -- per-company voucher number allocation.

Responsibility:
    Hands out the next voucher number for a company: one more than the
    highest numeric voucher number already stored, zero-padded to the
    configured width ("0001", "0002", ...).

Invariants enforced:
    - Numbers are unique per company and strictly increasing in allocation
      order.  Allocation holds ``SELECT ... FOR UPDATE`` on the company row
      until the caller's transaction ends, so concurrent postings for the
      same company serialize here.  The uq_voucher_company_number
      constraint is the storage-level backstop.
    - Non-numeric voucher numbers are ignored when computing the maximum.

Failure modes:
    - CompanyNotFoundError if the company does not exist.
    - Numbers freed by deleted vouchers are reused only when they were the
      highest; gaps below the maximum are never filled.
"""

from uuid import UUID

from sqlalchemy.orm import Session

from bookkeeping_kernel.logging_config import get_logger
from bookkeeping_kernel.models.voucher import Voucher
from bookkeeping_kernel.selectors.voucher_selector import VoucherSelector
from bookkeeping_kernel.services.base import BaseService

logger = get_logger("services.sequence")


def format_voucher_number(value: int, width: int) -> str:
    """Zero-pad to ``width`` digits; wider values are kept as-is."""
    return str(value).zfill(width)


def highest_voucher_number(numbers) -> int:
    """Largest purely numeric entry, 0 when there is none."""
    return max((int(n) for n in numbers if n and n.isdigit()), default=0)


class VoucherNumberService(BaseService[Voucher]):
    """Allocates voucher numbers under the company row lock."""

    def __init__(self, session: Session, width: int = 4):
        super().__init__(session)
        self._width = width
        self._vouchers = VoucherSelector(session)

    def next_number(self, company_id: UUID) -> str:
        """
        Lock the company and return its next voucher number.

        Postconditions:
            - The company row stays locked until the caller's transaction
              commits or rolls back.
        """
        self._get_company(company_id, lock=True)

        highest = highest_voucher_number(self._vouchers.existing_numbers(company_id))
        number = format_voucher_number(highest + 1, self._width)

        logger.debug(
            "voucher_number_allocated",
            extra={"company_id": str(company_id), "voucher_number": number},
        )
        return number
