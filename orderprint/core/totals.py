from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, TYPE_CHECKING

from orderprint.core.pricing import price_line

if TYPE_CHECKING:
	from orderprint.data.models import OrderHeader, OrderLine

# Order-level discount is not wired to any host field yet
ORDER_DISCOUNT = Decimal("0")


@dataclass(frozen=True)
class OrderTotals:
	subtotal: Decimal
	vat_total: Decimal
	order_discount: Decimal
	grand_total: Decimal


def compute_order(header: "OrderHeader", lines: Iterable["OrderLine"]) -> OrderTotals:
	"""Sum line subtotals and VAT for one order.

	Line VAT is dropped entirely when the header is not VAT-applicable,
	whatever VAT codes the lines carry.
	"""
	subtotal = Decimal("0")
	line_vat = Decimal("0")
	for line in lines:
		priced = price_line(line)
		subtotal += priced.line_subtotal
		line_vat += priced.line_vat

	vat_total = line_vat if header.vat_applicable else Decimal("0")
	return OrderTotals(
		subtotal=subtotal,
		vat_total=vat_total,
		order_discount=ORDER_DISCOUNT,
		grand_total=subtotal - ORDER_DISCOUNT + vat_total,
	)
