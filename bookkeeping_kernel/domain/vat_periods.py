"""
VAT period calendar and aggregation.

Responsibility:
    Map (year, period, period_type) to a date range and display name, and
    fold dated VAT amounts into per-period figures.  ZERO I/O.

Periods are 1-based: Monthly 1..12, Quarterly 1..4, Yearly 1.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal

from bookkeeping_kernel.domain.dtos import VatPeriodInfo, VatSummary
from bookkeeping_kernel.exceptions import InvalidVatPeriodError
from bookkeeping_kernel.models.vat_period import VatPeriodType

ZERO = Decimal("0")

PERIODS_PER_YEAR: Mapping[VatPeriodType, int] = {
    VatPeriodType.MONTHLY: 12,
    VatPeriodType.QUARTERLY: 4,
    VatPeriodType.YEARLY: 1,
}


def period_count(period_type: VatPeriodType | str) -> int:
    return PERIODS_PER_YEAR[VatPeriodType(period_type)]


def validate_period(period: int, period_type: VatPeriodType | str) -> None:
    """Raise InvalidVatPeriodError unless 1 <= period <= period_count."""
    period_type = VatPeriodType(period_type)
    if not 1 <= period <= period_count(period_type):
        raise InvalidVatPeriodError(period, period_type.value)


def period_dates(year: int, period: int, period_type: VatPeriodType | str) -> tuple[date, date]:
    """
    Inclusive first and last day of the period.

    Raises:
        InvalidVatPeriodError: period is outside 1..N for the type.
    """
    period_type = VatPeriodType(period_type)
    validate_period(period, period_type)

    if period_type == VatPeriodType.MONTHLY:
        first_month, last_month = period, period
    elif period_type == VatPeriodType.QUARTERLY:
        first_month, last_month = (period - 1) * 3 + 1, period * 3
    else:
        first_month, last_month = 1, 12

    last_day = calendar.monthrange(year, last_month)[1]
    return date(year, first_month, 1), date(year, last_month, last_day)


def period_name(period: int, period_type: VatPeriodType | str) -> str:
    """English month name, ``Q1``..``Q4`` or ``Full year``."""
    period_type = VatPeriodType(period_type)
    validate_period(period, period_type)

    if period_type == VatPeriodType.MONTHLY:
        return calendar.month_name[period]
    if period_type == VatPeriodType.QUARTERLY:
        return f"Q{period}"
    return "Full year"


def sum_in_range(items: Iterable[tuple[date, Decimal]], from_date: date, to_date: date) -> Decimal:
    """Sum the amounts whose date lies within [from_date, to_date]."""
    return sum(
        (amount for day, amount in items if from_date <= day <= to_date),
        ZERO,
    )


def build_vat_summary(
    year: int,
    period_type: VatPeriodType | str,
    output_items: Iterable[tuple[date, Decimal]],
    input_items: Iterable[tuple[date, Decimal]],
    paid_records: Mapping[int, object] | None = None,
) -> VatSummary:
    """
    Compute every period of the year from dated output and input VAT amounts.

    Figures are always live.  ``paid_records`` maps a period index to the
    stored payment record; only its payment state is read, never its
    snapshot figures.
    """
    period_type = VatPeriodType(period_type)
    output_items = list(output_items)
    input_items = list(input_items)
    paid_records = paid_records or {}

    periods = []
    for index in range(1, period_count(period_type) + 1):
        from_date, to_date = period_dates(year, index, period_type)
        output_vat = sum_in_range(output_items, from_date, to_date)
        input_vat = sum_in_range(input_items, from_date, to_date)

        record = paid_records.get(index)
        periods.append(
            VatPeriodInfo(
                year=year,
                period=index,
                period_type=period_type,
                period_name=period_name(index, period_type),
                from_date=from_date,
                to_date=to_date,
                output_vat=output_vat,
                input_vat=input_vat,
                vat_to_pay=output_vat - input_vat,
                is_paid=bool(record is not None and record.is_paid),
                paid_at=record.paid_at if record is not None else None,
                paid_amount=record.paid_amount if record is not None else None,
                payment_reference=record.payment_reference if record is not None else None,
                notes=record.notes if record is not None else None,
            )
        )

    total_output = sum((p.output_vat for p in periods), ZERO)
    total_input = sum((p.input_vat for p in periods), ZERO)
    total_to_pay = sum((p.vat_to_pay for p in periods), ZERO)
    total_paid = sum(
        (
            p.paid_amount if p.paid_amount is not None else p.vat_to_pay
            for p in periods
            if p.is_paid
        ),
        ZERO,
    )

    return VatSummary(
        year=year,
        period_type=period_type,
        periods=tuple(periods),
        total_output_vat=total_output,
        total_input_vat=total_input,
        total_vat_to_pay=total_to_pay,
        total_paid=total_paid,
        remaining=total_to_pay - total_paid,
    )
