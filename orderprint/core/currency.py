from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, localcontext
from typing import Optional

ZERO = Decimal("0")

# Host values at or above 10**28, or below 10**-27 in magnitude, read as 0
MAX_INPUT_EXPONENT = 28
# Computed amounts beyond this are not formatted
MAX_FORMAT_EXPONENT = 1000

# Longest numeric prefix, like the host's parseFloat
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def to_decimal(x: object) -> Decimal:
	"""Parse a host value into a Decimal. Never fails.

	Missing, empty or non-numeric values give 0. Strings use their longest
	numeric prefix ("12abc" -> 12). Non-finite values, magnitudes of 1e28 or
	more and magnitudes below 1e-27 give 0.
	"""
	if x is None or isinstance(x, bool):
		return ZERO
	if isinstance(x, Decimal):
		d = x
	elif isinstance(x, (int, float)):
		try:
			d = Decimal(str(x))
		except (InvalidOperation, ValueError):
			return ZERO
	else:
		m = _NUMBER_PREFIX.match(str(x).strip())
		if not m:
			return ZERO
		try:
			d = Decimal(m.group(0))
		except (InvalidOperation, ValueError):
			return ZERO
	if not d.is_finite() or (d and abs(d.adjusted()) >= MAX_INPUT_EXPONENT):
		return ZERO
	return d


def to_int(x: object) -> Optional[int]:
	"""Parse an option-set code. Returns None when absent or not numeric."""
	if x is None or isinstance(x, bool):
		return None
	if isinstance(x, int):
		return x
	text = str(x).strip()
	if not text:
		return None
	d = to_decimal(text)
	if d == ZERO and not _NUMBER_PREFIX.match(text):
		return None
	return int(d)


def _group(digits: str) -> str:
	sign = "-" if digits.startswith("-") else ""
	digits = digits.lstrip("-")
	return sign + f"{int(digits):,}"


def _amount(x: object) -> Decimal:
	"""Computed Decimals pass through unclamped; anything else is parsed."""
	if isinstance(x, Decimal) and x.is_finite() and (not x or abs(x.adjusted()) < MAX_FORMAT_EXPONENT):
		return x
	return to_decimal(x)


def _quantize(d: Decimal, exp: Decimal) -> Decimal:
	# Products of large inputs can need more digits than the default precision
	with localcontext() as ctx:
		ctx.prec = max(ctx.prec, d.adjusted() + 3)
		return d.quantize(exp, rounding=ROUND_HALF_UP)


def round_whole(x: object) -> Decimal:
	"""Round to whole currency units, half away from zero."""
	return _quantize(_amount(x), Decimal("1"))


def format_currency(x: object) -> str:
	"""Whole units with comma thousands separators: 1425000 -> '1,425,000'."""
	q = round_whole(x)
	if q == ZERO:
		q = ZERO
	return _group(str(int(q)))


def format_money(x: object, suffix: str = "đ") -> str:
	"""Currency text with the trailing currency marker."""
	s = format_currency(x)
	return f"{s} {suffix}" if suffix else s


def format_number(x: object) -> str:
	"""Shortest decimal text, thousands separators in the integer part only."""
	d = _amount(x).normalize()
	if d == d.to_integral_value():
		return _group(str(int(d)))
	whole, _, frac = f"{d:f}".partition(".")
	if whole in ("", "-"):
		whole += "0"
	return f"{_group(whole)}.{frac}"


def format_percent(fraction: object) -> str:
	"""Fraction as a one-decimal percentage: 0.05 -> '5.0%'."""
	pct = _quantize(to_decimal(fraction).scaleb(2), Decimal("0.1"))
	return f"{pct}%"


def format_date(value: Optional[datetime]) -> str:
	if value is None:
		return ""
	return value.strftime("%d/%m/%Y")


def format_print_date(value: datetime) -> str:
	"""Heading shown above the signature block."""
	return f"ngày {value:%d} tháng {value:%m} năm {value:%Y}"
