from __future__ import annotations

from decimal import Decimal

import pytest

from orderprint.core.lookups import (
    PAYMENT_TERMS,
    VAT_RATES,
    bank_transfer_text,
    is_vat_applicable,
    payment_term_text,
    vat_rate_for,
)


def test_payment_terms_exact() -> None:
    assert payment_term_text(283640005) == "prepaid before delivery"
    assert payment_term_text(283640004) == "60-day credit"
    assert payment_term_text(283640003) == "45-day credit"
    assert payment_term_text(283640002) == "30-day credit"
    assert payment_term_text(283640001) == "7-day credit"
    assert payment_term_text(283640000) == "cash"
    assert payment_term_text(30) == "pay on the 5th monthly"
    assert payment_term_text(14) == "pay twice, on the 10th and 25th"
    assert payment_term_text(0) == "pay after delivery"
    assert len(PAYMENT_TERMS) == 9


def test_unknown_payment_term_is_empty() -> None:
    assert payment_term_text(999) == ""
    assert payment_term_text(None) == ""


def test_vat_rates() -> None:
    assert vat_rate_for(191920000) == Decimal("0")
    assert vat_rate_for(191920001) == Decimal("0.05")
    assert vat_rate_for(191920002) == Decimal("0.08")
    assert vat_rate_for(191920003) == Decimal("0.10")


def test_unknown_or_missing_vat_code_defaults_to_ten_percent() -> None:
    assert vat_rate_for(None) == Decimal("0.10")
    assert vat_rate_for(123) == Decimal("0.10")


def test_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        VAT_RATES[1] = Decimal("0.2")  # type: ignore[index]
    with pytest.raises(TypeError):
        PAYMENT_TERMS[1] = "x"  # type: ignore[index]


def test_vat_applicable_sentinel() -> None:
    assert is_vat_applicable(191920000)
    assert not is_vat_applicable(191920001)
    assert not is_vat_applicable(None)


def test_bank_transfer_only_for_saigon() -> None:
    text = bank_transfer_text("Sài Gòn")
    assert "58010001687927" in text
    assert "BIDV" in text
    assert bank_transfer_text("Hà Nội") == ""
    assert bank_transfer_text(None) == ""


@pytest.mark.parametrize("region", [" Sài Gòn", "Sài Gòn ", "sài gòn", "Sai Gon"])
def test_bank_transfer_requires_exact_region(region: str) -> None:
    assert bank_transfer_text(region) == ""
