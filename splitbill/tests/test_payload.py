"""Tests for normalizing parsed-receipt JSON and bill documents."""

from __future__ import annotations

from decimal import Decimal

import pytest

from splitbill.receipt.payload import (
    RECEIPT_JSON_SCHEMA,
    ReceiptPayloadError,
    parse_receipt_payload,
    receipt_to_payload,
)
from splitbill.receipt.session_document import parse_bill_document


def test_payload_keeps_disagreeing_total() -> None:
    receipt = parse_receipt_payload(
        {
            "items": [{"name": "Ramen", "quantity": 2, "price": 12.5}],
            "tax": 2,
            "total": 30,
        }
    )
    assert receipt.items[0].name == "Ramen"
    assert receipt.items[0].quantity == Decimal("2")
    assert receipt.items[0].unit_price == Decimal("12.5")
    assert receipt.subtotal + receipt.tax == Decimal("27")
    assert receipt.total == Decimal("30")


def test_payload_fills_missing_or_bad_fields() -> None:
    receipt = parse_receipt_payload(
        {
            "items": [
                {"name": "No qty", "price": "4.00"},
                {"name": "Bad qty", "quantity": 0, "price": "x"},
                {"quantity": 3, "price": -1},
                "garbage",
            ],
        }
    )
    assert [(i.name, i.quantity, i.unit_price) for i in receipt.items] == [
        ("No qty", Decimal("1"), Decimal("4.00")),
        ("Bad qty", Decimal("1"), Decimal("0")),
        ("", Decimal("3"), Decimal("0")),
        ("", Decimal("1"), Decimal("0")),
    ]
    assert receipt.tax == Decimal("0")
    assert receipt.total == Decimal("4.00")


@pytest.mark.parametrize("data", [None, [], "receipt", {"items": {"name": "x"}}])
def test_payload_rejects_wrong_shape(data: object) -> None:
    with pytest.raises(ReceiptPayloadError):
        parse_receipt_payload(data)


def test_receipt_to_payload_round_trips_values() -> None:
    payload = {"items": [{"name": "Tea", "quantity": "1", "price": "3.20"}], "tax": "0.30", "total": "3.50"}
    assert receipt_to_payload(parse_receipt_payload(payload)) == payload


def test_schema_requires_items_and_total() -> None:
    assert RECEIPT_JSON_SCHEMA["required"] == ["items", "total"]
    assert RECEIPT_JSON_SCHEMA["properties"]["items"]["items"]["required"] == ["name", "quantity", "price"]


def test_bill_document_with_mapping_assignments() -> None:
    document = parse_bill_document(
        {
            "receipt": {"items": [{"name": "Pizza", "quantity": 1, "price": 20}], "total": 20},
            "participants": ["Ann", "Bob", None],
            "assignments": {"0": {"0": 1, "1": "2"}},
        }
    )
    assert document.participants == ["Ann", "Bob", ""]
    assert document.assignments.shares_for(0) == {0: Decimal("1"), 1: Decimal("2")}
    assert document.skipped == []


def test_bill_document_with_list_assignments_and_skips() -> None:
    document = parse_bill_document(
        {
            "receipt": {"items": [{"name": "A", "quantity": 1, "price": 1}], "total": 1},
            "participants": ["Ann"],
            "assignments": [{"0": 1, "4": 1, "x": 1}, {"0": 1}],
        }
    )
    assert document.assignments.shares_for(0) == {0: Decimal("1")}
    assert len(document.skipped) == 3


def test_bill_document_zero_share_is_not_stored() -> None:
    document = parse_bill_document(
        {
            "receipt": {"items": [{"name": "A", "quantity": 1, "price": 1}], "total": 1},
            "participants": ["Ann"],
            "assignments": {"0": {"0": 0}},
        }
    )
    assert document.assignments.shares_for(0) == {}


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"receipt": None},
        {"receipt": {"items": []}, "participants": "Ann"},
        {"receipt": {"items": []}, "participants": [], "assignments": 3},
    ],
)
def test_bill_document_rejects_wrong_shape(data: object) -> None:
    with pytest.raises(ReceiptPayloadError):
        parse_bill_document(data)


def test_bill_document_skips_non_ascii_digits_and_negative_indexes() -> None:
    document = parse_bill_document(
        {
            "receipt": {
                "items": [
                    {"name": "A", "quantity": 1, "price": 1},
                    {"name": "B", "quantity": 1, "price": 2},
                ],
                "total": 3,
            },
            "participants": ["Ann", "Bob"],
            "assignments": [{"²": 1, "0": 1}, {-1: 1, "1": 1}],
        }
    )
    assert document.assignments.shares_for(0) == {0: Decimal("1")}
    assert document.assignments.shares_for(1) == {1: Decimal("1")}
    assert document.skipped == ["item 0 participant '²'", "item 1 participant -1"]


def test_bill_document_skips_negative_item_index() -> None:
    document = parse_bill_document(
        {
            "receipt": {"items": [{"name": "A", "quantity": 1, "price": 1}], "total": 1},
            "participants": ["Ann"],
            "assignments": {"²": {"0": 1}, "-1": {"0": 1}},
        }
    )
    assert document.assignments.shares_for(0) == {}
    assert document.skipped == ["item '²'", "item '-1'"]


def test_payload_drops_amounts_too_large_to_round() -> None:
    receipt = parse_receipt_payload({"items": [{"name": "A", "quantity": 1, "price": "1e27"}], "tax": "1e30"})
    assert receipt.items[0].unit_price == Decimal("0")
    assert receipt.tax == Decimal("0")
