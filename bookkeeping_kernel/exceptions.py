"""
Module: bookkeeping_kernel.exceptions
Responsibility: Typed exception hierarchy for every business-rule violation
    the kernel can detect.  Each exception carries a machine-readable ``code``
    class attribute and structured attributes so callers (and the JSON log
    formatter) can react without parsing messages.
Architecture position: Kernel > Exceptions.  Imported by every layer.  MUST
    NOT import from any other kernel module.

Hierarchy:
    BookkeepingError
    +-- ValidationError                 (input rejected, nothing written)
    |   +-- UnbalancedVoucherError      UNBALANCED_VOUCHER
    |   +-- EmptyVoucherError           EMPTY_VOUCHER
    |   +-- InvalidAmountError          INVALID_AMOUNT
    |   +-- InvalidAccountReferenceError INVALID_ACCOUNT_REFERENCE
    |   +-- AccountNumberExistsError    ACCOUNT_NUMBER_EXISTS
    |   +-- InvalidVatPeriodError       INVALID_VAT_PERIOD
    +-- StateConflictError              (request valid, current state forbids it)
    |   +-- AlreadyClosedError          ALREADY_CLOSED
    |   +-- PriorYearOpenError          PRIOR_YEAR_OPEN
    |   +-- ClosedFiscalYearError       CLOSED_FISCAL_YEAR
    +-- NotFoundError
        +-- CompanyNotFoundError        COMPANY_NOT_FOUND

Lookups of vouchers, accounts and VAT records return None/False on a miss;
only operations that cannot proceed without the entity raise NotFoundError.
"""

from datetime import date
from decimal import Decimal


class BookkeepingError(Exception):
    """Base exception for all bookkeeping errors."""

    code: str = "BOOKKEEPING_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# =============================================================================
# Validation
# =============================================================================


class ValidationError(BookkeepingError):
    """Input was rejected before anything was written."""

    code: str = "VALIDATION_ERROR"


class UnbalancedVoucherError(ValidationError):
    """Voucher debits do not equal credits."""

    code: str = "UNBALANCED_VOUCHER"

    def __init__(self, total_debit: Decimal, total_credit: Decimal):
        self.total_debit = total_debit
        self.total_credit = total_credit
        super().__init__(
            f"Voucher is not balanced: debit {total_debit} != credit {total_credit}"
        )


class EmptyVoucherError(ValidationError):
    """Voucher has no rows."""

    code: str = "EMPTY_VOUCHER"

    def __init__(self):
        super().__init__("Voucher must have at least one row")


class InvalidAmountError(ValidationError):
    """A voucher row carries a negative debit or credit."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, row_index: int, debit: Decimal, credit: Decimal):
        self.row_index = row_index
        self.debit = debit
        self.credit = credit
        super().__init__(
            f"Row {row_index} has a negative amount "
            f"(debit {debit}, credit {credit})"
        )


class InvalidAccountReferenceError(ValidationError):
    """A voucher row references an account outside the company's chart."""

    code: str = "INVALID_ACCOUNT_REFERENCE"

    def __init__(self, account_id: str, reason: str = "not in company chart"):
        self.account_id = account_id
        self.reason = reason
        super().__init__(f"Account {account_id} is invalid: {reason}")


class AccountNumberExistsError(ValidationError):
    """The company already has an account with this number."""

    code: str = "ACCOUNT_NUMBER_EXISTS"

    def __init__(self, account_number: str):
        self.account_number = account_number
        super().__init__(f"Account number {account_number} already exists")


class InvalidVatPeriodError(ValidationError):
    """Period index is outside 1..N for the period type."""

    code: str = "INVALID_VAT_PERIOD"

    def __init__(self, period: int, period_type: str):
        self.period = period
        self.period_type = period_type
        super().__init__(f"Period {period} is not valid for {period_type} VAT periods")


# =============================================================================
# State conflicts
# =============================================================================


class StateConflictError(BookkeepingError):
    """The request is well-formed but the company's state forbids it."""

    code: str = "STATE_CONFLICT"


class AlreadyClosedError(StateConflictError):
    """The fiscal year has already been closed."""

    code: str = "ALREADY_CLOSED"

    def __init__(self, fiscal_year: int, current_fiscal_year: int):
        self.fiscal_year = fiscal_year
        self.current_fiscal_year = current_fiscal_year
        super().__init__(f"Fiscal year {fiscal_year} is already closed")


class PriorYearOpenError(StateConflictError):
    """An earlier fiscal year must be closed first."""

    code: str = "PRIOR_YEAR_OPEN"

    def __init__(self, fiscal_year: int, current_fiscal_year: int):
        self.fiscal_year = fiscal_year
        self.current_fiscal_year = current_fiscal_year
        super().__init__(
            f"Cannot close {fiscal_year}; fiscal year {current_fiscal_year} "
            "must be closed first"
        )


class ClosedFiscalYearError(StateConflictError):
    """A voucher is dated in a fiscal year that is already closed."""

    code: str = "CLOSED_FISCAL_YEAR"

    def __init__(self, voucher_date: date, current_fiscal_year: int):
        self.voucher_date = voucher_date
        self.current_fiscal_year = current_fiscal_year
        super().__init__(
            f"Cannot post on {voucher_date}; fiscal years before "
            f"{current_fiscal_year} are closed"
        )


# =============================================================================
# Not found
# =============================================================================


class NotFoundError(BookkeepingError):
    """An entity required by the operation does not exist."""

    code: str = "NOT_FOUND"


class CompanyNotFoundError(NotFoundError):
    """The company does not exist."""

    code: str = "COMPANY_NOT_FOUND"

    def __init__(self, company_id: str):
        self.company_id = company_id
        super().__init__(f"Company {company_id} not found")
