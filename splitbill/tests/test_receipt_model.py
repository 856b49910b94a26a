"""Tests for receipt edits and total recomputation."""

from __future__ import annotations

from decimal import Decimal

import pytest
from conftest import make_receipt

from splitbill.domain.receipt import LineItem, Receipt, parse_amount


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2", Decimal("2")),
        (" 1.50 ", Decimal("1.50")),
        (3, Decimal("3")),
        (0.1, Decimal("0.1")),
        (Decimal("4.25"), Decimal("4.25")),
        ("", None),
        ("abc", None),
        ("NaN", None),
        ("inf", None),
        (None, None),
        (True, None),
        ("1e27", None),
        ("1e16", None),
        ("9999999999999999.99", Decimal("9999999999999999.99")),
        ("0E+100", Decimal("0")),
    ],
)
def test_parse_amount(raw: object, expected: Decimal | None) -> None:
    assert parse_amount(raw) == expected


def test_line_total_is_quantity_times_unit_price() -> None:
    assert LineItem(name="Soda", quantity=Decimal("3"), unit_price=Decimal("1.25")).line_total == Decimal("3.75")


def test_recompute_total_is_idempotent() -> None:
    receipt = make_receipt(("A", "2", "5"), ("B", "1", "3.50"), tax="1.20", total="99")
    assert receipt.recompute_total() == Decimal("14.70")
    assert receipt.recompute_total() == Decimal("14.70")
    assert receipt.total == Decimal("14.70")


def test_external_total_is_kept_until_a_money_edit() -> None:
    receipt = make_receipt(("A", "1", "10"), tax="1", total="50")
    assert receipt.total == Decimal("50")

    assert receipt.set_item_name(0, "Burger")
    assert receipt.total == Decimal("50")

    assert receipt.set_item_price(0, "12")
    assert receipt.total == Decimal("13")


def test_set_item_quantity_rejects_non_positive_and_non_numeric() -> None:
    receipt = make_receipt(("A", "2", "5"), total="99")
    for bad in ("0", "-1", "x", "", None):
        assert receipt.set_item_quantity(0, bad) is False
    assert receipt.items[0].quantity == Decimal("2")
    assert receipt.total == Decimal("99")

    assert receipt.set_item_quantity(0, "0.5")
    assert receipt.items[0].quantity == Decimal("0.5")
    assert receipt.total == Decimal("2.5")


def test_set_item_price_allows_zero_but_not_negative() -> None:
    receipt = make_receipt(("A", "1", "5"))
    assert receipt.set_item_price(0, "-0.01") is False
    assert receipt.items[0].unit_price == Decimal("5")
    assert receipt.set_item_price(0, "0")
    assert receipt.total == Decimal("0")


def test_set_tax() -> None:
    receipt = make_receipt(("A", "1", "10"))
    assert receipt.set_tax("abc") is False
    assert receipt.set_tax("-1") is False
    assert receipt.tax == Decimal("0")
    assert receipt.set_tax("2.5")
    assert receipt.total == Decimal("12.5")


def test_setters_ignore_out_of_range_index() -> None:
    receipt = make_receipt(("A", "1", "10"))
    assert receipt.set_item_name(5, "X") is False
    assert receipt.set_item_quantity(-1, "2") is False
    assert receipt.set_item_price(1, "2") is False
    assert receipt.items[0] == LineItem(name="A", quantity=Decimal("1"), unit_price=Decimal("10"))


def test_add_item_appends_blank_item() -> None:
    receipt = make_receipt(("A", "1", "10"))
    index = receipt.add_item()
    assert index == 1
    assert receipt.items[1] == LineItem(name="", quantity=Decimal("1"), unit_price=Decimal("0"))
    assert receipt.total == Decimal("10")


def test_remove_item_keeps_at_least_one() -> None:
    receipt = make_receipt(("A", "1", "10"), ("B", "2", "3"), tax="1")
    assert receipt.remove_item(0)
    assert [item.name for item in receipt.items] == ["B"]
    assert receipt.total == Decimal("7")

    assert receipt.remove_item(0) is False
    assert len(receipt.items) == 1
    assert receipt.remove_item(3) is False


def test_empty_receipt_subtotal_is_zero() -> None:
    assert Receipt().subtotal == Decimal("0")


def test_set_item_price_rejects_amounts_too_large_to_round() -> None:
    receipt = make_receipt(("Pizza", "1", "20"))
    assert not receipt.set_item_price(0, "1e27")
    assert not receipt.set_tax("1e27")
    assert receipt.items[0].unit_price == Decimal("20")
    assert receipt.total == Decimal("20")
