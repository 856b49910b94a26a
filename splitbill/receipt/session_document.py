"""Parse a JSON bill document (receipt, participants, assignments).

Document shape::

    {
      "receipt": {"items": [{"name": "Pizza", "quantity": 1, "price": 20}], "tax": 0, "total": 20},
      "participants": ["Ann", "Bob"],
      "assignments": {"0": {"0": 1, "1": 1}}
    }

``assignments`` may also be a list with one ``{participant: share}`` object
per item. Indexes outside the receipt or roster are reported back instead of
being applied.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from splitbill.domain.assignment import AssignmentMap
from splitbill.domain.receipt import Receipt, parse_amount
from splitbill.receipt.payload import ReceiptPayloadError, parse_receipt_payload


@dataclass
class BillDocument:
    receipt: Receipt
    participants: list[str]
    assignments: AssignmentMap
    skipped: list[str] = field(default_factory=list)


def _parse_index(raw: object) -> int | None:
    """Non-negative int or decimal-digit string; anything else is None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 0 else None
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text.isdecimal():
        return None
    try:
        return int(text)
    except ValueError:
        return None


def _iter_item_claims(raw: object) -> list[tuple[object, object]]:
    if isinstance(raw, Mapping):
        return list(raw.items())
    if isinstance(raw, list):
        return list(enumerate(raw))
    raise ReceiptPayloadError("'assignments' must be an object or a list")


def parse_bill_document(data: object) -> BillDocument:
    """
    Build receipt, roster and assignment map from a bill document.

    Raises:
        ReceiptPayloadError: If the document or one of its sections has the wrong type.
    """
    if not isinstance(data, Mapping):
        raise ReceiptPayloadError("Bill document must be an object")

    receipt = parse_receipt_payload(data.get("receipt"))

    raw_participants = data.get("participants", [])
    if not isinstance(raw_participants, list):
        raise ReceiptPayloadError("'participants' must be a list of names")
    participants = ["" if name is None else str(name) for name in raw_participants]

    item_count = len(receipt.items)
    triples: list[tuple[int, int, Decimal]] = []
    skipped: list[str] = []
    for raw_item, raw_claims in _iter_item_claims(data.get("assignments", {})):
        item = _parse_index(raw_item)
        if item is None or item >= item_count:
            skipped.append(f"item {raw_item!r}")
            continue
        if not isinstance(raw_claims, Mapping):
            skipped.append(f"item {raw_item!r} claims")
            continue
        for raw_participant, raw_share in raw_claims.items():
            participant = _parse_index(raw_participant)
            share = parse_amount(raw_share)
            if participant is None or participant >= len(participants) or share is None:
                skipped.append(f"item {item} participant {raw_participant!r}")
                continue
            triples.append((item, participant, share))

    return BillDocument(
        receipt=receipt,
        participants=participants,
        assignments=AssignmentMap.from_shares(item_count, triples),
        skipped=skipped,
    )
