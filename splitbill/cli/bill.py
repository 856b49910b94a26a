"""Bill command handlers used by the unified CLI."""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from splitbill.application.parse import ReceiptParseRequest, run_receipt_parse
from splitbill.application.split_file import BillDocumentError, run_split_file
from splitbill.domain.currency import detect_currency
from splitbill.receipt.formatter import format_receipt, format_settlement
from splitbill.receipt.payload import receipt_to_payload
from splitbill.runtime import get_logger, get_settings

logger = get_logger(__name__)


def _display_currency(override: str | None) -> str:
    if override:
        return override.upper()
    settings = get_settings()
    if settings.currency:
        return settings.currency.upper()
    _, currency = detect_currency(settings.locale)
    return currency


def cmd_parse(args: argparse.Namespace) -> None:
    """Parse a receipt photo through the completion service and print JSON."""
    settings = get_settings()
    if args.api_url:
        settings = replace(settings, api_url=args.api_url)
    if args.model:
        settings = replace(settings, model=args.model)

    result = run_receipt_parse(ReceiptParseRequest(image_path=Path(args.image), settings=settings))

    if result.status == "file_not_found":
        print(f"Error: {result.error}")
        sys.exit(1)

    if result.status == "invalid_image":
        print(f"Invalid receipt image: {result.error}")
        sys.exit(1)

    if result.status == "service_unavailable":
        print(f"Parse service unavailable: {result.error}")
        print("Check OPENROUTER_API_KEY and COMPLETION_MODEL.")
        sys.exit(1)

    if result.status == "invalid_response" or result.receipt is None:
        print(f"Parse failed: {result.error}")
        sys.exit(1)

    print(format_receipt(result.receipt, _display_currency(None)), file=sys.stderr)
    print(json.dumps(receipt_to_payload(result.receipt), indent=2))


def cmd_split(args: argparse.Namespace) -> None:
    """Compute and print a settlement for a bill document."""
    try:
        outcome = run_split_file(Path(args.bill))
    except BillDocumentError as exc:
        logger.error("%s", exc)
        print(f"Error: {exc}")
        sys.exit(1)

    if outcome.status != "ok" or outcome.result is None:
        print(f"Cannot split: {outcome.error}")
        sys.exit(1)

    if args.json:
        print(json.dumps(outcome.result.to_dict(), indent=2))
        return
    print(format_settlement(outcome.result, _display_currency(args.currency)), end="")


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server."""
    import uvicorn

    from splitbill.runtime import server

    print(f"Starting split bill server on {args.host}:{args.port}")
    print(f"Endpoints: http://{args.host}:{args.port}/api/parse | /api/split")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)
