from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, TYPE_CHECKING

from orderprint.core.currency import to_decimal
from orderprint.core.lookups import vat_rate_for

if TYPE_CHECKING:
	from orderprint.data.models import OrderLine


@dataclass(frozen=True)
class LinePricing:
	unit_price_after_discount: Decimal
	line_subtotal: Decimal
	line_vat: Decimal


def compute_line(
	quantity: object,
	unit_price: object,
	discount1: object,
	discount2: object,
	discount1_is_absolute: bool,
	vat_rate_code: Optional[int],
) -> LinePricing:
	"""Price one line: two stacked discounts, then quantity, then VAT.

	discount1 is either a fraction of the unit price or, when
	discount1_is_absolute, an amount in currency taken off each unit.
	discount2 is always a fraction of the price left after discount1.
	Nothing is rounded here; rounding happens when formatting.
	"""
	qty = to_decimal(quantity)
	price = to_decimal(unit_price)
	d1 = to_decimal(discount1)
	d2 = to_decimal(discount2)

	discount_amount1 = d1 if discount1_is_absolute else price * d1
	after_d1 = price - discount_amount1
	discount_amount2 = after_d1 * d2
	after_d2 = after_d1 - discount_amount2

	subtotal = qty * after_d2
	return LinePricing(
		unit_price_after_discount=after_d2,
		line_subtotal=subtotal,
		line_vat=subtotal * vat_rate_for(vat_rate_code),
	)


def price_line(line: "OrderLine") -> LinePricing:
	return compute_line(
		line.quantity,
		line.unit_price,
		line.effective_discount1,
		line.discount2,
		line.discount1_is_absolute,
		line.vat_rate_code,
	)
