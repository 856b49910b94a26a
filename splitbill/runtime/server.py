"""FastAPI server: receipt photo parsing and bill splitting over HTTP."""

from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from splitbill.domain.allocation import SplitRefused, compute_split
from splitbill.receipt.payload import ReceiptPayloadError, parse_receipt_payload, receipt_to_payload
from splitbill.receipt.session_document import parse_bill_document
from splitbill.receipt.upload import validate_receipt_image
from splitbill.runtime.logging import get_logger
from splitbill.runtime.parse_service import (
    ParseResponseInvalid,
    ParseServiceUnavailable,
    call_parse_service_async,
)
from splitbill.runtime.settings import get_settings

logger = get_logger(__name__)

app = FastAPI(title="Split Bill")


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message}, status_code=status_code)


@app.get("/api")
async def index() -> dict[str, Any]:
    return {"message": "OK", "data": {"date": datetime.now(timezone.utc).isoformat()}}


@app.post("/api/parse")
async def parse_receipt(request: Request) -> JSONResponse:
    """Receive a receipt photo (multipart field ``receipt``) and return the parsed items."""
    form = await request.form()
    if not form:
        return _error("Missing form data", 400)

    upload = form.get("receipt")
    if not isinstance(upload, UploadFile):
        return _error("Missing receipt file", 400)

    settings = get_settings()
    contents = await upload.read()
    problem = validate_receipt_image(upload.filename, upload.content_type, contents, settings.max_image_bytes)
    if problem is not None:
        logger.info("Rejected upload %r: %s", upload.filename, problem)
        return _error(problem, 400)

    mime_type = upload.content_type or "image/jpeg"
    try:
        raw_receipt = await call_parse_service_async(contents, mime_type, settings)
        receipt = parse_receipt_payload(raw_receipt)
    except ParseServiceUnavailable as e:
        logger.error("Parse service unavailable: %s", e)
        return _error("Receipt parsing service unavailable", 502)
    except (ParseResponseInvalid, ReceiptPayloadError) as e:
        logger.error("error POST /api/parse: %s", e)
        return _error("Internal server error", 500)

    return JSONResponse({"message": "OK", "data": {"receipt": receipt_to_payload(receipt)}})


@app.post("/api/split")
async def split_bill(request: Request) -> JSONResponse:
    """Compute a settlement from a bill document (receipt, participants, assignments)."""
    try:
        data = await request.json()
    except ValueError:
        return _error("Request body must be JSON", 400)

    try:
        document = parse_bill_document(data)
    except ReceiptPayloadError as e:
        return _error(str(e), 400)

    for entry in document.skipped:
        logger.warning("Ignoring out-of-range assignment: %s", entry)

    try:
        result = compute_split(document.receipt, document.participants, document.assignments)
    except SplitRefused as e:
        return _error(str(e), 400)

    return JSONResponse({"message": "OK", "data": {"settlement": result.to_dict()}})


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
