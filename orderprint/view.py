from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence

from orderprint.core.currency import (
	format_date,
	format_money,
	format_number,
	format_percent,
	format_print_date,
)
from orderprint.core.lookups import bank_transfer_text, payment_term_text
from orderprint.core.pricing import price_line
from orderprint.core.settings import Settings
from orderprint.core.totals import OrderTotals, compute_order
from orderprint.data.models import OrderHeader, OrderLine


@dataclass(frozen=True)
class LineRow:
	index: int
	product_name: str
	discount1: str
	discount2: str
	unit: str
	quantity: str
	unit_price: str
	unit_price_after_discount: str
	line_total: str
	line_vat: str
	delivery_date: str


@dataclass(frozen=True)
class InvoiceView:
	"""Display strings handed to the renderer."""

	order_name: str
	trade_name: str
	customer_name: str
	address: str
	phone: str
	notes: str
	created_on: str
	print_date: str
	payment_term: str
	bank_transfer: str
	vat_applicable: bool
	subtotal: str
	vat_total: str
	order_discount: str
	grand_total: str
	totals: OrderTotals
	rows: List[LineRow] = field(default_factory=list)


def _discount1_text(line: OrderLine, suffix: str) -> str:
	if line.discount1_is_absolute:
		return format_money(line.discount_amount, suffix)
	return format_percent(line.discount1)


def build_rows(lines: Sequence[OrderLine], settings: Optional[Settings] = None) -> List[LineRow]:
	suffix = (settings or Settings()).currency_suffix
	rows: List[LineRow] = []
	for i, line in enumerate(lines, start=1):
		priced = price_line(line)
		rows.append(LineRow(
			index=i,
			product_name=line.product_name,
			discount1=_discount1_text(line, suffix),
			discount2=format_percent(line.discount2),
			unit=line.unit,
			quantity=format_number(line.quantity),
			unit_price=format_money(line.unit_price, suffix),
			unit_price_after_discount=format_money(priced.unit_price_after_discount, suffix),
			line_total=format_money(priced.line_subtotal, suffix),
			line_vat=format_money(priced.line_vat, suffix),
			delivery_date=format_date(line.delivery_date),
		))
	return rows


def build_invoice_view(
	header: OrderHeader,
	lines: Sequence[OrderLine],
	settings: Optional[Settings] = None,
	today: Optional[datetime] = None,
) -> InvoiceView:
	settings = settings or Settings()
	suffix = settings.currency_suffix
	totals = compute_order(header, lines)
	return InvoiceView(
		order_name=header.name,
		trade_name=header.trade_name,
		customer_name=header.customer_name,
		address=header.address,
		phone=header.phone,
		notes=header.notes,
		created_on=format_date(header.created_on),
		print_date=format_print_date(today or datetime.now()),
		payment_term=payment_term_text(header.payment_term_code),
		bank_transfer=bank_transfer_text(header.region),
		vat_applicable=header.vat_applicable,
		subtotal=format_money(totals.subtotal, suffix),
		vat_total=format_money(totals.vat_total, suffix),
		order_discount=format_money(totals.order_discount, suffix),
		grand_total=format_money(totals.grand_total, suffix),
		totals=totals,
		rows=build_rows(lines, settings),
	)
