"""Tests for currency formatting and amount parsing."""

from __future__ import annotations

from decimal import Decimal

import pytest

from utils.currency import format_currency, parse_amount


def test_format_currency_has_two_decimals_and_no_grouping() -> None:
    assert format_currency(Decimal("5000")) == "$5000.00"
    assert format_currency(None) == "$0.00"


@pytest.mark.parametrize(
    "text, expected",
    [("1000", Decimal("1000.00")), (" 12.345 ", Decimal("12.34")), ("0.5", Decimal("0.50"))],
)
def test_parse_amount_rounds_to_cents(text, expected) -> None:
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "NaN", "Infinity", "9" * 40])
def test_parse_amount_rejects_unusable_input(text) -> None:
    assert parse_amount(text) is None
