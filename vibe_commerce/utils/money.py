# vibe_commerce/utils/money.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # przez str, zeby float 19.99 nie zamienil sie w 19.989999...
    return Decimal(str(value))


def round2(value) -> Decimal:
    """Zaokraglenie do groszy, zawsze ROUND_HALF_UP."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(price, qty: int) -> Decimal:
    return round2(to_decimal(price) * qty)


def cart_total(line_totals: Iterable[Decimal]) -> Decimal:
    # suma juz zaokraglonych linii, nie zaokraglamy surowej sumy
    return round2(sum(line_totals, Decimal("0.00")))
