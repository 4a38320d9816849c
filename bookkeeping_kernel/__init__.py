"""
Bookkeeping Kernel

Double-entry bookkeeping core for small businesses:
- Chart of accounts per company
- Balanced, sequentially numbered vouchers
- Statements derived from the voucher log (never stored)
- VAT period reconciliation
- Year-end closing that carries the net result forward
"""

__version__ = "0.1.0"
