"""Kernel services.  Every service flushes; none commits."""

from bookkeeping_kernel.services.account_service import AccountService
from bookkeeping_kernel.services.company_service import CompanyService
from bookkeeping_kernel.services.document_service import DocumentService
from bookkeeping_kernel.services.report_service import ReportService
from bookkeeping_kernel.services.sequence_service import VoucherNumberService
from bookkeeping_kernel.services.vat_service import VatService
from bookkeeping_kernel.services.voucher_service import VoucherService
from bookkeeping_kernel.services.year_end_service import YearEndService

__all__ = [
    "AccountService",
    "CompanyService",
    "DocumentService",
    "ReportService",
    "VatService",
    "VoucherNumberService",
    "VoucherService",
    "YearEndService",
]
