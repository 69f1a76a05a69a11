from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from sqlmodel import Field, SQLModel

from orderprint.core.currency import ZERO, to_decimal, to_int
from orderprint.core.lookups import is_vat_applicable

DEFAULT_UNIT = "Cái"

# Host column names, header dataset
H_ID = "crdfd_saleorderid"
H_NAME = "crdfd_name"
H_CUSTOMER = "crdfd_khachhangtext"
H_TRADE_NAME = "crdfd_tenthuongmai_text"
H_VAT_STATUS = "crdfd_vatstatus"
H_CREATED_ON = "createdon"
H_ADDRESS = "crdfd_iachitext"
H_PHONE = "crdfd_sttext"
H_NOTES = "crdfd_notes"
H_PAYMENT_TERM = "crdfd_dieu_khoan_thanh_toan"
H_REGION = "crdfd_localtext"

# Host column names, line dataset
L_PRODUCT = "crdfd_tensanphamtext"
L_DISCOUNT1 = "crdfd_chieckhau"
L_DISCOUNT2 = "crdfd_chieckhau2"
L_QUANTITY = "crdfd_productnum"
L_PRICE = "crdfd_giagoc"
L_DELIVERY = "crdfd_ngaygiaodukientonghop"
L_UNIT = "crdfd_onvionhang"
L_VAT_CODE = "crdfd_ieuchinhgtgt"
L_DISCOUNT_AMOUNT = "crdfd_chieckhauvn"

_DATE_FORMATS = ("%d/%m/%Y %H:%M", "%d/%m/%Y %H:%M:%S", "%d/%m/%Y", "%Y-%m-%d %H:%M:%S")


def parse_timestamp(value: Any) -> Optional[datetime]:
	"""Best-effort timestamp parsing; anything unrecognised gives None."""
	if value is None:
		return None
	if isinstance(value, datetime):
		return value
	text = str(value).strip()
	if not text:
		return None
	try:
		return datetime.fromisoformat(text.replace("Z", "+00:00"))
	except ValueError:
		pass
	for fmt in _DATE_FORMATS:
		try:
			return datetime.strptime(text, fmt)
		except ValueError:
			continue
	return None


def _text(record: Mapping[str, Any], key: str, strip: bool = True) -> str:
	value = record.get(key)
	if value is None:
		return ""
	return str(value).strip() if strip else str(value)


@dataclass(frozen=True)
class OrderHeader:
	order_id: str = ""
	name: str = ""
	trade_name: str = ""
	customer_name: str = ""
	address: str = ""
	phone: str = ""
	notes: str = ""
	vat_applicable: bool = False
	payment_term_code: Optional[int] = None
	created_on: Optional[datetime] = None
	region: str = ""

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "OrderHeader":
		return cls(
			order_id=_text(record, H_ID),
			name=_text(record, H_NAME),
			trade_name=_text(record, H_TRADE_NAME),
			customer_name=_text(record, H_CUSTOMER),
			address=_text(record, H_ADDRESS),
			phone=_text(record, H_PHONE),
			notes=_text(record, H_NOTES),
			vat_applicable=is_vat_applicable(to_int(record.get(H_VAT_STATUS))),
			payment_term_code=to_int(record.get(H_PAYMENT_TERM)),
			created_on=parse_timestamp(record.get(H_CREATED_ON)),
			# Region is matched verbatim against the bank-transfer table
			region=_text(record, H_REGION, strip=False),
		)


@dataclass(frozen=True)
class OrderLine:
	"""Read-only snapshot of one line record for a single render pass."""

	product_name: str = ""
	quantity: Decimal = ZERO
	unit_price: Decimal = ZERO
	discount1: Decimal = ZERO
	discount2: Decimal = ZERO
	# discount1 as an amount in currency; used only when the fraction is zero
	discount_amount: Decimal = ZERO
	vat_rate_code: Optional[int] = None
	delivery_date: Optional[datetime] = None
	unit: str = DEFAULT_UNIT

	@property
	def discount1_is_absolute(self) -> bool:
		return self.discount1 == ZERO and self.discount_amount != ZERO

	@property
	def effective_discount1(self) -> Decimal:
		return self.discount_amount if self.discount1_is_absolute else self.discount1

	@classmethod
	def from_record(cls, record: Mapping[str, Any], default_unit: str = DEFAULT_UNIT) -> "OrderLine":
		return cls(
			product_name=_text(record, L_PRODUCT),
			quantity=to_decimal(record.get(L_QUANTITY)),
			unit_price=to_decimal(record.get(L_PRICE)),
			discount1=to_decimal(record.get(L_DISCOUNT1)),
			discount2=to_decimal(record.get(L_DISCOUNT2)),
			discount_amount=to_decimal(record.get(L_DISCOUNT_AMOUNT)),
			vat_rate_code=to_int(record.get(L_VAT_CODE)),
			delivery_date=parse_timestamp(record.get(L_DELIVERY)),
			unit=_text(record, L_UNIT) or default_unit,
		)


# Local store tables (SQLite), shaped like the host datasets

class SaleOrder(SQLModel, table=True):
	id: Optional[int] = Field(default=None, primary_key=True)
	number: str = Field(
		index=True,
		sa_column_kwargs={"unique": True},
	)
	customer_name: str = ""
	trade_name: str = ""
	vat_status: Optional[int] = None
	created_on: datetime = Field(default_factory=datetime.now)
	address: Optional[str] = None
	phone: Optional[str] = None
	notes: Optional[str] = None
	payment_term: Optional[int] = None
	region: Optional[str] = None


class SaleOrderDetail(SQLModel, table=True):
	id: Optional[int] = Field(default=None, primary_key=True)
	order_id: int = Field(foreign_key="saleorder.id", index=True)
	product_name: str
	quantity: float = 0.0
	unit_price: float = 0.0
	discount1: float = 0.0
	discount2: float = 0.0
	discount_amount: float = 0.0
	vat_code: Optional[int] = None
	delivery_date: Optional[datetime] = None
	unit: Optional[str] = None
