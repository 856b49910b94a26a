"""Receipt photo parse workflow orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

import httpx

from splitbill.receipt.payload import ReceiptPayloadError, parse_receipt_payload
from splitbill.receipt.upload import image_type_for_filename, validate_receipt_image
from splitbill.runtime import get_logger, get_settings
from splitbill.runtime.parse_service import ParseResponseInvalid, ParseServiceUnavailable, call_parse_service

if TYPE_CHECKING:
    from splitbill.domain.receipt import Receipt
    from splitbill.runtime.settings import Settings

logger = get_logger(__name__)

ParseStatus = Literal[
    "parsed",
    "file_not_found",
    "invalid_image",
    "service_unavailable",
    "invalid_response",
]


@dataclass(frozen=True)
class ReceiptParseRequest:
    """Inputs for parsing one receipt photo."""

    image_path: Path
    settings: Settings | None = None
    client: httpx.Client | None = None


@dataclass(frozen=True)
class ReceiptParseResult:
    """Outcome from the parse workflow."""

    status: ParseStatus
    receipt: Receipt | None = None
    error: str | None = None


def run_receipt_parse(request: ReceiptParseRequest) -> ReceiptParseResult:
    """Run parse flow: validate image -> completion service -> normalized receipt."""
    if not request.image_path.exists():
        return ReceiptParseResult(
            status="file_not_found",
            error=f"Receipt file not found: {request.image_path}",
        )

    settings = request.settings or get_settings()
    data = request.image_path.read_bytes()
    mime_type = image_type_for_filename(request.image_path.name)
    problem = validate_receipt_image(request.image_path.name, mime_type, data, settings.max_image_bytes)
    if problem is not None:
        return ReceiptParseResult(status="invalid_image", error=problem)
    assert mime_type is not None

    try:
        raw_receipt = call_parse_service(data, mime_type, settings, client=request.client)
    except ParseServiceUnavailable as exc:
        return ReceiptParseResult(status="service_unavailable", error=str(exc))
    except ParseResponseInvalid as exc:
        logger.error("Unusable parse response: %s", exc)
        return ReceiptParseResult(status="invalid_response", error=str(exc))

    try:
        receipt = parse_receipt_payload(raw_receipt)
    except ReceiptPayloadError as exc:
        logger.error("Parsed receipt has the wrong shape: %s", exc)
        return ReceiptParseResult(status="invalid_response", error=str(exc))

    logger.info("Parsed %d items from %s", len(receipt.items), request.image_path.name)
    return ReceiptParseResult(status="parsed", receipt=receipt)
