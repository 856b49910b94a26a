"""Receipt payload normalization and text formatting."""

from splitbill.receipt.formatter import format_receipt, format_settlement
from splitbill.receipt.payload import (
    RECEIPT_JSON_SCHEMA,
    ReceiptPayloadError,
    parse_receipt_payload,
    receipt_to_payload,
)

__all__ = [
    "format_receipt",
    "format_settlement",
    "RECEIPT_JSON_SCHEMA",
    "ReceiptPayloadError",
    "parse_receipt_payload",
    "receipt_to_payload",
]
