"""
Tests for VoucherSelector: detail lookup and listing order.
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

from bookkeeping_kernel.models.voucher import Voucher, VoucherType

SALE = (("1930", 1000, 0), ("3001", 0, 1000))


class TestGetVoucher:
    def test_detail_matches_posted(self, post, voucher_selector, company):
        posted = post(date(2024, 3, 1), *SALE, description="Consulting")

        found = voucher_selector.get_voucher(company.id, posted.id)
        assert found.voucher_number == posted.voucher_number
        assert found.description == "Consulting"
        assert [(r.account_number, r.debit, r.credit) for r in found.rows] == [
            ("1930", Decimal("1000"), Decimal("0")),
            ("3001", Decimal("0"), Decimal("1000")),
        ]

    def test_unknown_id(self, voucher_selector, company):
        assert voucher_selector.get_voucher(company.id, uuid4()) is None

    def test_other_company(self, post, voucher_selector, company_service):
        posted = post(date(2024, 3, 1), *SALE)
        other = company_service.create_company("Other AB", seed_chart=False)

        assert voucher_selector.get_voucher(other.id, posted.id) is None


class TestListVouchers:
    def test_newest_first(self, post, voucher_selector, company):
        post(date(2024, 3, 1), *SALE)
        post(date(2024, 5, 1), *SALE)
        post(date(2024, 3, 1), *SALE)

        listed = voucher_selector.list_vouchers(company.id)
        assert [(v.voucher_date, v.voucher_number) for v in listed] == [
            (date(2024, 5, 1), "0002"),
            (date(2024, 3, 1), "0003"),
            (date(2024, 3, 1), "0001"),
        ]

    def test_numeric_ordering_past_width(self, post, session, voucher_selector, company):
        post(date(2024, 3, 1), *SALE)
        session.add(
            Voucher(
                company_id=company.id,
                voucher_number="10000",
                voucher_date=date(2024, 3, 1),
                description="Wide",
                voucher_type=VoucherType.OTHER.value,
            )
        )
        session.flush()

        assert [v.voucher_number for v in voucher_selector.list_vouchers(company.id)] == ["10000", "0001"]

    def test_total_amount_is_debit_sum(self, post, voucher_selector, company):
        post(date(2024, 3, 1), ("1930", 1250, 0), ("3001", 0, 1000), ("2610", 0, 250), voucher_type=VoucherType.INVOICE)

        (summary,) = voucher_selector.list_vouchers(company.id)
        assert summary.total_amount == Decimal("1250")
        assert summary.voucher_type == VoucherType.INVOICE

    def test_empty(self, voucher_selector, company):
        assert voucher_selector.list_vouchers(company.id) == []
