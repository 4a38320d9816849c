"""Read-only query selectors."""

from bookkeeping_kernel.selectors.document_selector import DocumentSelector
from bookkeeping_kernel.selectors.ledger_selector import LedgerSelector
from bookkeeping_kernel.selectors.voucher_selector import VoucherSelector

__all__ = [
    "DocumentSelector",
    "LedgerSelector",
    "VoucherSelector",
]
