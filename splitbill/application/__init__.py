"""Bill-splitting workflows."""

from splitbill.application.parse import ReceiptParseRequest, ReceiptParseResult, run_receipt_parse
from splitbill.application.session import BillSession, SplitOutcome
from splitbill.application.split_file import BillDocumentError, load_bill_session, run_split_file
from splitbill.application.wizard import InvalidTransition, Wizard

__all__ = [
    "BillSession",
    "SplitOutcome",
    "Wizard",
    "InvalidTransition",
    "ReceiptParseRequest",
    "ReceiptParseResult",
    "run_receipt_parse",
    "BillDocumentError",
    "load_bill_session",
    "run_split_file",
]
