"""ORM models for the bookkeeping kernel."""

from bookkeeping_kernel.models.account import Account, AccountType
from bookkeeping_kernel.models.company import Company
from bookkeeping_kernel.models.documents import (
    PayrollRecord,
    PurchaseDocument,
    PurchaseDocumentStatus,
    SalesDocument,
    SalesDocumentStatus,
)
from bookkeeping_kernel.models.vat_period import VatPeriod, VatPeriodType
from bookkeeping_kernel.models.voucher import Voucher, VoucherRow, VoucherType

__all__ = [
    "Account",
    "AccountType",
    "Company",
    "PayrollRecord",
    "PurchaseDocument",
    "PurchaseDocumentStatus",
    "SalesDocument",
    "SalesDocumentStatus",
    "VatPeriod",
    "VatPeriodType",
    "Voucher",
    "VoucherRow",
    "VoucherType",
]
