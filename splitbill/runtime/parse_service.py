"""Client for the AI completion service that extracts receipt items from a photo."""

from __future__ import annotations

import base64
import json
import time
from typing import Any

import httpx

from splitbill.receipt.payload import RECEIPT_JSON_SCHEMA
from splitbill.runtime.logging import get_logger
from splitbill.runtime.settings import Settings

logger = get_logger(__name__)

SYSTEM_PROMPT = """
You are a helpful assistant that act as a split bill assistant.

You will be given an image of a receipt and need to extract all the items with their quantities and prices.
Parse the receipt image and identify:
1. All individual items with their names
2. The quantity of each items
3. The price of each items
4. The total amount of the bill
"""

USER_PROMPT = "Please parse this receipt image and extract all items with the quantities and prices."


class ParseServiceUnavailable(RuntimeError):
    """Raised when the completion service cannot be reached or returns an error."""


class ParseResponseInvalid(RuntimeError):
    """Raised when the completion service reply does not contain receipt JSON."""


def build_completion_request(image_bytes: bytes, mime_type: str, model: str | None) -> dict[str, Any]:
    """Build the chat-completions body asking for schema-constrained receipt JSON."""
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": USER_PROMPT},
                    {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{encoded}"}},
                ],
            },
        ],
        "response_format": {
            "type": "json_schema",
            "json_schema": {"name": "items_schema", "schema": RECEIPT_JSON_SCHEMA},
        },
    }


def extract_receipt_json(completion: object) -> dict[str, Any]:
    """Pull the receipt object out of a chat-completions response body."""
    try:
        content = completion["choices"][0]["message"]["content"]  # type: ignore[index]
    except (KeyError, IndexError, TypeError) as e:
        raise ParseResponseInvalid(f"Unexpected completion response shape: {e}") from e

    if isinstance(content, dict):
        return content
    if not isinstance(content, str):
        raise ParseResponseInvalid("Completion content is not text")
    try:
        receipt = json.loads(content)
    except json.JSONDecodeError as e:
        raise ParseResponseInvalid(f"Completion content is not JSON: {e}") from e
    if not isinstance(receipt, dict):
        raise ParseResponseInvalid("Completion content is not a JSON object")
    return receipt


def call_parse_service(
    image_bytes: bytes,
    mime_type: str,
    settings: Settings,
    client: httpx.Client | None = None,
) -> dict[str, Any]:
    """
    Send a receipt image to the completion service and return the receipt JSON.

    Args:
        image_bytes: Raw image content.
        mime_type: Image MIME type used in the data URL.
        settings: Endpoint, credentials and timeout.
        client: Optional preconfigured httpx client (used in tests).

    Returns:
        The untrusted receipt dict (``items``, ``tax``, ``total``).
    """
    url = settings.completions_url
    headers = {"Content-Type": "application/json"}
    if settings.api_key:
        headers["Authorization"] = f"Bearer {settings.api_key}"
    body = build_completion_request(image_bytes, mime_type, settings.model)

    logger.info("Sending receipt to parse service at %s...", url)
    start_time = time.time()
    try:
        if client is None:
            response = httpx.post(url, json=body, headers=headers, timeout=settings.timeout)
        else:
            response = client.post(url, json=body, headers=headers, timeout=settings.timeout)
    except httpx.RequestError as e:
        logger.error("Failed to connect to parse service: %s", e)
        raise ParseServiceUnavailable(f"Failed to connect to parse service: {e}") from e
    logger.info("Parse service returned in %.2f seconds", time.time() - start_time)

    if response.status_code != 200:
        logger.error("Parse service error: %s", response.status_code)
        raise ParseServiceUnavailable(f"Parse service error: {response.status_code}")

    try:
        completion = response.json()
    except ValueError as e:
        raise ParseResponseInvalid(f"Parse service returned non-JSON body: {e}") from e
    logger.debug("Completion response: %s", completion)
    return extract_receipt_json(completion)


async def call_parse_service_async(
    image_bytes: bytes,
    mime_type: str,
    settings: Settings,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Async variant of ``call_parse_service`` for the HTTP server."""
    url = settings.completions_url
    headers = {"Content-Type": "application/json"}
    if settings.api_key:
        headers["Authorization"] = f"Bearer {settings.api_key}"
    body = build_completion_request(image_bytes, mime_type, settings.model)

    logger.info("Sending receipt to parse service at %s...", url)
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.timeout) as owned_client:
                response = await owned_client.post(url, json=body, headers=headers)
        else:
            response = await client.post(url, json=body, headers=headers)
    except httpx.RequestError as e:
        logger.error("Failed to connect to parse service: %s", e)
        raise ParseServiceUnavailable(f"Failed to connect to parse service: {e}") from e

    if response.status_code != 200:
        logger.error("Parse service error: %s", response.status_code)
        raise ParseServiceUnavailable(f"Parse service error: {response.status_code}")

    try:
        completion = response.json()
    except ValueError as e:
        raise ParseResponseInvalid(f"Parse service returned non-JSON body: {e}") from e
    return extract_receipt_json(completion)
