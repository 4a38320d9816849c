"""
Tests for the VAT period calendar and per-period aggregation.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from bookkeeping_kernel.domain.vat_periods import (
    build_vat_summary,
    period_count,
    period_dates,
    period_name,
    sum_in_range,
    validate_period,
)
from bookkeeping_kernel.exceptions import InvalidVatPeriodError
from bookkeeping_kernel.models.vat_period import VatPeriodType


# =============================================================================
# Calendar
# =============================================================================


class TestPeriodCalendar:
    def test_period_counts(self):
        assert period_count(VatPeriodType.MONTHLY) == 12
        assert period_count(VatPeriodType.QUARTERLY) == 4
        assert period_count(VatPeriodType.YEARLY) == 1

    def test_monthly_february_in_leap_year(self):
        assert period_dates(2024, 2, VatPeriodType.MONTHLY) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_monthly_february_in_common_year(self):
        assert period_dates(2023, 2, VatPeriodType.MONTHLY) == (date(2023, 2, 1), date(2023, 2, 28))

    @pytest.mark.parametrize(
        "period,expected",
        [
            (1, (date(2024, 1, 1), date(2024, 3, 31))),
            (2, (date(2024, 4, 1), date(2024, 6, 30))),
            (3, (date(2024, 7, 1), date(2024, 9, 30))),
            (4, (date(2024, 10, 1), date(2024, 12, 31))),
        ],
    )
    def test_quarterly_ranges(self, period, expected):
        assert period_dates(2024, period, VatPeriodType.QUARTERLY) == expected

    def test_yearly_range(self):
        assert period_dates(2024, 1, VatPeriodType.YEARLY) == (date(2024, 1, 1), date(2024, 12, 31))

    def test_names(self):
        assert period_name(3, VatPeriodType.MONTHLY) == "March"
        assert period_name(4, VatPeriodType.QUARTERLY) == "Q4"
        assert period_name(1, VatPeriodType.YEARLY) == "Full year"

    @pytest.mark.parametrize(
        "period,period_type",
        [
            (0, VatPeriodType.MONTHLY),
            (13, VatPeriodType.MONTHLY),
            (5, VatPeriodType.QUARTERLY),
            (2, VatPeriodType.YEARLY),
        ],
    )
    def test_out_of_range_period_rejected(self, period, period_type):
        with pytest.raises(InvalidVatPeriodError) as exc_info:
            validate_period(period, period_type)
        assert exc_info.value.code == "INVALID_VAT_PERIOD"
        assert exc_info.value.period == period

    def test_period_dates_rejects_invalid_period(self):
        with pytest.raises(InvalidVatPeriodError):
            period_dates(2024, 5, VatPeriodType.QUARTERLY)


# =============================================================================
# Aggregation
# =============================================================================


OUTPUT = [
    (date(2024, 1, 15), Decimal("100")),
    (date(2024, 2, 10), Decimal("50")),
    (date(2024, 5, 1), Decimal("200")),
]
INPUT = [(date(2024, 3, 31), Decimal("30"))]


def _paid(paid_amount=None, reference=None):
    return SimpleNamespace(
        is_paid=True,
        paid_at=datetime(2024, 4, 12, tzinfo=timezone.utc),
        paid_amount=paid_amount,
        payment_reference=reference,
        notes=None,
    )


class TestSumInRange:
    def test_inclusive_bounds(self):
        items = [(date(2024, 1, 1), Decimal("1")), (date(2024, 3, 31), Decimal("2"))]
        assert sum_in_range(items, date(2024, 1, 1), date(2024, 3, 31)) == Decimal("3")

    def test_empty(self):
        assert sum_in_range([], date(2024, 1, 1), date(2024, 12, 31)) == Decimal("0")


class TestBuildVatSummary:
    def test_quarterly_figures(self):
        summary = build_vat_summary(2024, VatPeriodType.QUARTERLY, OUTPUT, INPUT)

        q1, q2, q3, q4 = summary.periods
        assert (q1.output_vat, q1.input_vat, q1.vat_to_pay) == (
            Decimal("150"),
            Decimal("30"),
            Decimal("120"),
        )
        assert q2.vat_to_pay == Decimal("200")
        assert q3.vat_to_pay == Decimal("0")
        assert q4.vat_to_pay == Decimal("0")
        assert summary.total_output_vat == Decimal("350")
        assert summary.total_input_vat == Decimal("30")
        assert summary.total_vat_to_pay == Decimal("320")
        assert summary.total_paid == Decimal("0")
        assert summary.remaining == Decimal("320")

    def test_period_names_and_indexes(self):
        summary = build_vat_summary(2024, VatPeriodType.MONTHLY, [], [])

        assert [p.period for p in summary.periods] == list(range(1, 13))
        assert summary.periods[0].period_name == "January"
        assert summary.periods[11].period_name == "December"

    def test_paid_period_defaults_to_vat_to_pay(self):
        summary = build_vat_summary(2024, VatPeriodType.QUARTERLY, OUTPUT, INPUT, {1: _paid()})

        assert summary.periods[0].is_paid
        assert summary.total_paid == Decimal("120")
        assert summary.remaining == Decimal("200")

    def test_paid_amount_overrides_vat_to_pay(self):
        records = {1: _paid(paid_amount=Decimal("100"), reference="OCR-1")}
        summary = build_vat_summary(2024, VatPeriodType.QUARTERLY, OUTPUT, INPUT, records)

        assert summary.total_paid == Decimal("100")
        assert summary.periods[0].payment_reference == "OCR-1"

    def test_unpaid_record_keeps_reference(self):
        record = SimpleNamespace(
            is_paid=False, paid_at=None, paid_amount=None, payment_reference="OCR-9", notes="n"
        )
        summary = build_vat_summary(2024, VatPeriodType.YEARLY, OUTPUT, INPUT, {1: record})

        period = summary.periods[0]
        assert not period.is_paid
        assert period.payment_reference == "OCR-9"
        assert summary.total_paid == Decimal("0")

    def test_monthly_and_quarterly_totals_match_yearly(self):
        totals = {
            period_type: build_vat_summary(2024, period_type, OUTPUT, INPUT).total_vat_to_pay
            for period_type in VatPeriodType
        }
        assert len(set(totals.values())) == 1

    def test_items_outside_year_ignored(self):
        items = OUTPUT + [(date(2023, 12, 31), Decimal("999"))]
        summary = build_vat_summary(2024, VatPeriodType.YEARLY, items, [])

        assert summary.total_output_vat == Decimal("350")
