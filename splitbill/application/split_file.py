"""Split a bill described by a JSON document on disk."""

from __future__ import annotations

import json
from pathlib import Path

from splitbill.application.session import BillSession, SplitOutcome
from splitbill.receipt.payload import ReceiptPayloadError
from splitbill.receipt.session_document import parse_bill_document
from splitbill.runtime import get_logger

logger = get_logger(__name__)


class BillDocumentError(ValueError):
    """Raised when a bill document cannot be read or has the wrong shape."""


def load_bill_session(path: Path) -> BillSession:
    """Read a bill document into a fresh session.

    Raises:
        BillDocumentError: The file is missing, not JSON, or not a bill document.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise BillDocumentError(f"Bill file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise BillDocumentError(f"Bill file is not valid JSON: {exc}") from exc

    try:
        document = parse_bill_document(data)
    except ReceiptPayloadError as exc:
        raise BillDocumentError(str(exc)) from exc

    for entry in document.skipped:
        logger.warning("Ignoring out-of-range assignment: %s", entry)

    session = BillSession()
    session.load_receipt(document.receipt)
    session.roster.names = document.participants
    session.assignments = document.assignments
    return session


def run_split_file(path: Path) -> SplitOutcome:
    return load_bill_session(path).compute_split()
