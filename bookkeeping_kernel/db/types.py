"""
Module: bookkeeping_kernel.db.types
Responsibility: Rounding and coercion helpers for monetary values.
Architecture position: Kernel > DB.  May be imported by models/, domain/,
    services/, and selectors/.  MUST NOT import from any of those layers.

Invariants enforced:
    - No floats anywhere in the kernel.  All monetary amounts use Decimal
      stored as Numeric(19, 4).
    - round_money() is the ONLY sanctioned rounding function for computed
      monetary values (corporate tax, contributions).
"""

from decimal import ROUND_HALF_UP, Decimal

MONEY_DECIMAL_PLACES = 2
DEFAULT_ROUNDING = ROUND_HALF_UP

ZERO = Decimal("0")


def round_money(
    value: Decimal,
    decimal_places: int = MONEY_DECIMAL_PLACES,
    rounding: str = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Round a monetary value to the given number of decimal places.

    Postconditions: Returns value quantized with the given rounding mode
        (ROUND_HALF_UP by default).
    """
    quantize_str = "0." + "0" * decimal_places
    return value.quantize(Decimal(quantize_str), rounding=rounding)


def to_decimal(value) -> Decimal:
    """
    Coerce an aggregate result to Decimal.

    SQL SUM over no rows yields NULL; treat that as zero.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
