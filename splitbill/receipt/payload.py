"""Normalize parsed-receipt JSON into the editable receipt model.

The JSON comes from an AI completion service and is untrusted: numbers may
be strings, fields may be missing, and the stated total may disagree with
the items. The stated total is kept as given.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from splitbill.domain.receipt import LineItem, Receipt, parse_amount

RECEIPT_JSON_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "items": {
            "type": "array",
            "description": "The list of items",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "The name of the item"},
                    "quantity": {
                        "type": "number",
                        "description": "The quantity of the item, if not available, set to 1",
                    },
                    "price": {
                        "type": "number",
                        "description": "The price of the item, in full number without currency symbol",
                    },
                },
                "required": ["name", "quantity", "price"],
            },
        },
        "tax": {
            "type": "number",
            "description": (
                "The tax amount of the bill, in full number without currency symbol, if not available, set to 0"
            ),
        },
        "total": {
            "type": "number",
            "description": "The total amount of the bill, in full number without currency symbol",
        },
    },
    "required": ["items", "total"],
}


class ReceiptPayloadError(ValueError):
    """Raised when a payload does not have the receipt shape at all."""


def _item_from_payload(raw: object) -> LineItem:
    if not isinstance(raw, Mapping):
        return LineItem(name="")

    name = raw.get("name")
    quantity = parse_amount(raw.get("quantity"))
    if quantity is None or quantity <= 0:
        quantity = Decimal("1")
    price = parse_amount(raw.get("price"))
    if price is None or price < 0:
        price = Decimal("0")
    return LineItem(
        name=str(name) if name is not None else "",
        quantity=quantity,
        unit_price=price,
    )


def parse_receipt_payload(data: object) -> Receipt:
    """Build a Receipt from ``{items: [{name, quantity, price}], tax, total}``.

    Raises:
        ReceiptPayloadError: If ``data`` is not a mapping or ``items`` is not a list.
    """
    if not isinstance(data, Mapping):
        raise ReceiptPayloadError("Receipt payload must be an object")
    raw_items = data.get("items", [])
    if not isinstance(raw_items, list):
        raise ReceiptPayloadError("Receipt payload 'items' must be a list")

    tax = parse_amount(data.get("tax"))
    if tax is None or tax < 0:
        tax = Decimal("0")

    receipt = Receipt(items=[_item_from_payload(raw) for raw in raw_items], tax=tax)

    total = parse_amount(data.get("total"))
    if total is None or total < 0:
        receipt.recompute_total()
    else:
        receipt.total = total
    return receipt


def receipt_to_payload(receipt: Receipt) -> dict[str, Any]:
    """Inverse of ``parse_receipt_payload``; numbers are emitted as strings."""
    return {
        "items": [
            {"name": item.name, "quantity": str(item.quantity), "price": str(item.unit_price)}
            for item in receipt.items
        ],
        "tax": str(receipt.tax),
        "total": str(receipt.total),
    }
