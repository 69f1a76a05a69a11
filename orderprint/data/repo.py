from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlmodel import select
from sqlalchemy import func

from orderprint.data.db import session_scope, get_session
from orderprint.data import models as m
from orderprint.data.models import SaleOrder, SaleOrderDetail


def create_sale_order(order_dto: Dict[str, Any]) -> SaleOrder:
	"""
	Create a sale order and its detail lines.

	order_dto structure:
	  {
		'number': str,  # required (must be unique)
		'customer_name': str,  # required
		'trade_name': str | None,
		'vat_status': int | None,  # 191920000 = VAT included
		'created_on': datetime | None,
		'address': str | None, 'phone': str | None, 'notes': str | None,
		'payment_term': int | None,
		'region': str | None,
		'items': [
		   {'product_name': str, 'quantity': float, 'unit_price': float,
		    'discount1': float, 'discount2': float, 'discount_amount': float,
		    'vat_code': int | None, 'delivery_date': datetime | None, 'unit': str | None}, ...
		]  # can be empty
	  }
	"""
	number = (order_dto.get("number") or "").strip()
	customer_name = (order_dto.get("customer_name") or "").strip()
	items_dto: Iterable[Dict[str, Any]] = order_dto.get("items", []) or []

	if not (number and customer_name):
		raise ValueError("Missing required fields: number, customer_name")

	with session_scope() as s:
		dup = s.exec(select(SaleOrder).where(SaleOrder.number == number)).first()
		if dup:
			raise ValueError(f"Sale order number already exists: {number}")

		order = SaleOrder(
			number=number,
			customer_name=customer_name,
			trade_name=order_dto.get("trade_name") or "",
			vat_status=order_dto.get("vat_status"),
			created_on=order_dto.get("created_on") or datetime.now(),
			address=order_dto.get("address"),
			phone=order_dto.get("phone"),
			notes=order_dto.get("notes"),
			payment_term=order_dto.get("payment_term"),
			region=order_dto.get("region"),
		)
		s.add(order)
		s.flush()
		s.refresh(order)

		for item in items_dto:
			s.add(SaleOrderDetail(
				order_id=order.id,  # type: ignore[arg-type]
				product_name=str(item.get("product_name", "")),
				quantity=float(item.get("quantity", 0) or 0),
				unit_price=float(item.get("unit_price", 0) or 0),
				discount1=float(item.get("discount1", 0) or 0),
				discount2=float(item.get("discount2", 0) or 0),
				discount_amount=float(item.get("discount_amount", 0) or 0),
				vat_code=item.get("vat_code"),
				delivery_date=item.get("delivery_date"),
				unit=item.get("unit"),
			))

	return order


def get_sale_order(number: str) -> Optional[SaleOrder]:
	with get_session() as s:
		return s.exec(select(SaleOrder).where(SaleOrder.number == number)).first()


def order_record(order: SaleOrder) -> Dict[str, Any]:
	"""Header row as a host-style record keyed by host column names."""
	return {
		m.H_ID: str(order.id),
		m.H_NAME: order.number,
		m.H_CUSTOMER: order.customer_name,
		m.H_TRADE_NAME: order.trade_name,
		m.H_VAT_STATUS: order.vat_status,
		m.H_CREATED_ON: order.created_on.isoformat() if order.created_on else None,
		m.H_ADDRESS: order.address,
		m.H_PHONE: order.phone,
		m.H_NOTES: order.notes,
		m.H_PAYMENT_TERM: order.payment_term,
		m.H_REGION: order.region,
	}


def detail_record(detail: SaleOrderDetail) -> Dict[str, Any]:
	"""Detail row as a host-style record; numbers travel as text like the host's formatted values."""
	return {
		m.L_PRODUCT: detail.product_name,
		m.L_QUANTITY: str(detail.quantity),
		m.L_PRICE: str(detail.unit_price),
		m.L_DISCOUNT1: str(detail.discount1),
		m.L_DISCOUNT2: str(detail.discount2),
		m.L_DISCOUNT_AMOUNT: str(detail.discount_amount),
		m.L_VAT_CODE: detail.vat_code,
		m.L_DELIVERY: detail.delivery_date.isoformat() if detail.delivery_date else None,
		m.L_UNIT: detail.unit,
	}


def count_details(order_id: int) -> int:
	with get_session() as s:
		return int(s.exec(
			select(func.count(SaleOrderDetail.id)).where(SaleOrderDetail.order_id == order_id)
		).one())


def list_detail_records(order_id: int, offset: int = 0, limit: Optional[int] = None) -> List[Dict[str, Any]]:
	"""Detail records for one order in id order, one page at a time."""
	with get_session() as s:
		stmt = (
			select(SaleOrderDetail)
			.where(SaleOrderDetail.order_id == order_id)
			.order_by(SaleOrderDetail.id.asc())
			.offset(max(0, offset))
		)
		if isinstance(limit, int) and limit > 0:
			stmt = stmt.limit(limit)
		return [detail_record(d) for d in s.exec(stmt).all()]


def delete_sale_order(order_id: int) -> int:
	"""Delete an order and all of its lines. Returns 1 if deleted, 0 if not found."""
	with session_scope() as s:
		order = s.get(SaleOrder, order_id)
		if not order:
			return 0
		for d in s.exec(select(SaleOrderDetail).where(SaleOrderDetail.order_id == order_id)).all():
			s.delete(d)
		s.delete(order)
		s.flush()
		return 1
