from __future__ import annotations

from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional

# Header VAT-status code meaning "VAT included"; any other status means no VAT
VAT_APPLICABLE_STATUS = 191920000

PAYMENT_TERMS: Mapping[int, str] = MappingProxyType({
	283640005: "prepaid before delivery",
	283640004: "60-day credit",
	283640003: "45-day credit",
	283640002: "30-day credit",
	283640001: "7-day credit",
	283640000: "cash",
	30: "pay on the 5th monthly",
	14: "pay twice, on the 10th and 25th",
	0: "pay after delivery",
})

VAT_RATES: Mapping[int, Decimal] = MappingProxyType({
	191920000: Decimal("0"),
	191920001: Decimal("0.05"),
	191920002: Decimal("0.08"),
	191920003: Decimal("0.10"),
})

# Applied when a line has no VAT code or an unknown one
DEFAULT_VAT_RATE = Decimal("0.10")

BANK_TRANSFER: Mapping[str, str] = MappingProxyType({
	"Sài Gòn": "\n".join([
		"THÔNG TIN CHUYỂN KHOẢN",
		"Lê Thị Ngọc Anh",
		"Tài khoản : 58010001687927",
		"Ngân hàng : BIDV",
		"Chi nhánh : Bình Định",
	]),
})


def payment_term_text(code: Optional[int]) -> str:
	"""Display text for a payment-term code; unknown or missing codes give ''."""
	if code is None:
		return ""
	return PAYMENT_TERMS.get(code, "")


def vat_rate_for(code: Optional[int]) -> Decimal:
	if code is None:
		return DEFAULT_VAT_RATE
	return VAT_RATES.get(code, DEFAULT_VAT_RATE)


def is_vat_applicable(status: Optional[int]) -> bool:
	return status == VAT_APPLICABLE_STATUS


def bank_transfer_text(region: Optional[str]) -> str:
	"""Fixed bank-transfer block for an exact region name, '' for every other value."""
	return BANK_TRANSFER.get(region or "", "")
