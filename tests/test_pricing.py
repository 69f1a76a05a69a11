from __future__ import annotations

from decimal import Decimal

import pytest

from orderprint.core.pricing import compute_line, price_line
from orderprint.core.totals import compute_order
from orderprint.data.models import OrderHeader, OrderLine

VAT_0 = 191920000
VAT_10 = 191920003


def test_sample_line() -> None:
    priced = compute_line(10, 150000, Decimal("0.05"), 0, False, VAT_10)
    assert priced.unit_price_after_discount == Decimal("142500")
    assert priced.line_subtotal == Decimal("1425000")
    assert priced.line_vat == Decimal("142500")


@pytest.mark.parametrize(
    "q, p, d1, d2",
    [
        ("0", "150000", "0.05", "0"),
        ("3", "1000", "0.1", "0.2"),
        ("2.5", "75000", "0", "0.02"),
        ("7", "0", "0.3", "0.3"),
        ("1", "99999", "1", "0"),
        ("12", "4200", "0.15", "1"),
    ],
)
def test_percentage_discounts_stack(q, p, d1, d2) -> None:
    q, p, d1, d2 = (Decimal(v) for v in (q, p, d1, d2))
    priced = compute_line(q, p, d1, d2, False, VAT_0)
    assert priced.line_subtotal == q * p * (1 - d1) * (1 - d2)
    assert priced.line_vat == 0


@pytest.mark.parametrize(
    "q, p, a, d2",
    [
        ("2", "1000", "150", "0.1"),
        ("5", "250000", "20000", "0"),
        ("1", "500", "500", "0.5"),
    ],
)
def test_absolute_discount1(q, p, a, d2) -> None:
    q, p, a, d2 = (Decimal(v) for v in (q, p, a, d2))
    priced = compute_line(q, p, a, d2, True, VAT_0)
    assert priced.line_subtotal == q * (p - a) * (1 - d2)


def test_unparseable_inputs_are_zero() -> None:
    priced = compute_line("abc", "150000", None, "", False, VAT_10)
    assert priced.line_subtotal == 0
    assert priced.unit_price_after_discount == Decimal("150000")


def test_unknown_vat_code_uses_ten_percent() -> None:
    priced = compute_line(1, 1000, 0, 0, False, 42)
    assert priced.line_vat == Decimal("100")
    assert compute_line(1, 1000, 0, 0, False, None).line_vat == Decimal("100")


def test_price_line_uses_absolute_discount_when_fraction_missing() -> None:
    line = OrderLine(quantity=Decimal("2"), unit_price=Decimal("1000"), discount_amount=Decimal("150"))
    assert line.discount1_is_absolute
    assert price_line(line).line_subtotal == Decimal("1700")

    both = OrderLine(
        quantity=Decimal("2"),
        unit_price=Decimal("1000"),
        discount1=Decimal("0.1"),
        discount_amount=Decimal("150"),
    )
    assert not both.discount1_is_absolute
    assert price_line(both).line_subtotal == Decimal("1800")


def _two_lines() -> list[OrderLine]:
    return [
        OrderLine(
            product_name="Keo Silicone",
            quantity=Decimal("10"),
            unit_price=Decimal("150000"),
            discount1=Decimal("0.05"),
            vat_rate_code=VAT_10,
        ),
        OrderLine(
            product_name="Keo Dán",
            quantity=Decimal("1"),
            unit_price=Decimal("250000"),
            vat_rate_code=VAT_0,
        ),
    ]


def test_order_totals_with_vat() -> None:
    totals = compute_order(OrderHeader(vat_applicable=True), _two_lines())
    assert totals.subtotal == Decimal("1675000")
    assert totals.vat_total == Decimal("142500")
    assert totals.order_discount == 0
    assert totals.grand_total == Decimal("1817500")


def test_order_without_vat_drops_line_vat() -> None:
    totals = compute_order(OrderHeader(vat_applicable=False), _two_lines())
    assert totals.vat_total == 0
    assert totals.grand_total == Decimal("1675000")


def test_compute_order_is_pure() -> None:
    header = OrderHeader(vat_applicable=True)
    lines = _two_lines()
    assert compute_order(header, lines) == compute_order(header, lines)


def test_empty_order() -> None:
    totals = compute_order(OrderHeader(vat_applicable=True), [])
    assert totals.subtotal == 0
    assert totals.grand_total == 0


def test_huge_inputs_do_not_raise() -> None:
    priced = compute_line("1e999999", "1e10", 0, 0, False, None)
    assert priced.line_subtotal == 0

    big = "9" * 27
    priced = compute_line(big, big, "0.5", "0.5", False, VAT_10)
    assert priced.line_subtotal > 0
    totals = compute_order(
        OrderHeader(vat_applicable=True),
        [OrderLine(quantity=Decimal(big), unit_price=Decimal(big), vat_rate_code=VAT_10)],
    )
    assert totals.grand_total > totals.subtotal
