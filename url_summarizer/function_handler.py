"""Serverless entry point (Netlify / AWS Lambda proxy-event contract).

Receives ``{"httpMethod", "body", "isBase64Encoded"}`` and returns
``{"statusCode", "headers", "body"}``. The pipeline is the same one the
long-running server uses.
"""

import asyncio
import base64
import binascii
import json
import logging
from typing import Any, Optional

import httpx

from url_summarizer.config import DEFAULT_GEMINI_API_URL, Settings, configure_logging, load_settings
from url_summarizer.errors import ValidationError
from url_summarizer.workflow import as_summarizer_error, parse_summarize_request, summarize_url

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def _json_response(status_code: int, payload: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {**CORS_HEADERS, "Content-Type": "application/json"},
        "body": json.dumps(payload),
    }


def _event_body(event: dict[str, Any]) -> Optional[str]:
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise ValidationError(str(exc), error="Invalid request body encoding") from exc
    return body


async def handle_event(
    event: dict[str, Any],
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict[str, Any]:
    method = (event.get("httpMethod") or "").upper()
    if method == "OPTIONS":
        return {"statusCode": 204, "headers": dict(CORS_HEADERS), "body": ""}
    if method != "POST":
        return _json_response(405, {"error": "Method not allowed"})

    try:
        request = parse_summarize_request(_event_body(event))
        logger.info(f"Summarize request: {request.url}")
        result = await summarize_url(request.url, settings, transport)
    except Exception as exc:
        error = as_summarizer_error(exc)
        return _json_response(error.status_code, error.to_payload())

    return _json_response(200, result.model_dump())


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    settings = load_settings(default_api_url=DEFAULT_GEMINI_API_URL)
    configure_logging(settings.log_level)
    return asyncio.run(handle_event(event, settings))
