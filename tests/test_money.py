from decimal import Decimal

import pytest

from vibe_commerce.utils.money import round2, line_total, cart_total


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("0.125"), Decimal("0.13")),
        (Decimal("0.135"), Decimal("0.14")),
        (Decimal("2.675"), Decimal("2.68")),
        (Decimal("0.005"), Decimal("0.01")),
        (Decimal("0.0049"), Decimal("0.00")),
        (19.99, Decimal("19.99")),
    ],
)
def test_round2_is_half_up(value, expected):
    assert round2(value) == expected


def test_line_total():
    assert line_total(Decimal("49.99"), 2) == Decimal("99.98")
    assert line_total(Decimal("0.335"), 1) == Decimal("0.34")


def test_total_sums_rounded_lines():
    # 3 x 0.005 -> kazda linia 0.01, razem 0.03 (a nie round(0.015) = 0.02)
    lines = [line_total(Decimal("0.005"), 1) for _ in range(3)]

    assert cart_total(lines) == Decimal("0.03")


def test_total_of_nothing():
    assert cart_total([]) == Decimal("0.00")
