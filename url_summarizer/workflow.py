"""The summarize pipeline shared by the server and the function handler.

fetch -> normalize -> summarize -> shape. Each entry point only translates
its platform's request and response to and from `summarize_url`.
"""

import logging
import time
from typing import Any, Iterable, Optional, Union

import httpx
import pydantic

from url_summarizer.config import Settings
from url_summarizer.errors import SummarizerError, UnexpectedError, ValidationError
from url_summarizer.llm_client import ensure_configured, summarize_text
from url_summarizer.normalizer import normalize_text
from url_summarizer.page_fetcher import create_client, fetch_page
from url_summarizer.schemas import SummarizeRequest, SummarizeResponse

logger = logging.getLogger(__name__)

# pydantic error types that mean "no usable url was supplied"
_MISSING_URL_ERROR_TYPES = {"missing", "string_too_short", "string_type"}


def validation_error_from(errors: Iterable[dict[str, Any]]) -> ValidationError:
    """Map pydantic/FastAPI validation errors onto a 400 ValidationError."""
    errors = list(errors)
    if any(e.get("type") == "json_invalid" for e in errors):
        return ValidationError(error="Invalid JSON in request body")
    if any(e.get("type") in _MISSING_URL_ERROR_TYPES for e in errors):
        return ValidationError()
    msg = "; ".join(f"{'.'.join(str(l) for l in e.get('loc', ()))}: {e.get('msg', '')}" for e in errors)
    return ValidationError(msg, error="Invalid request")


def parse_summarize_request(raw_body: Union[str, bytes, None]) -> SummarizeRequest:
    if not raw_body:
        raise ValidationError()
    try:
        return SummarizeRequest.model_validate_json(raw_body)
    except pydantic.ValidationError as exc:
        raise validation_error_from(exc.errors()) from exc


def as_summarizer_error(exc: Exception) -> SummarizerError:
    """Log a pipeline failure and return it in its typed form."""
    if not isinstance(exc, SummarizerError):
        logger.error(f"Unexpected error: {exc}", exc_info=exc)
        return UnexpectedError(str(exc))
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc}")
    else:
        logger.warning(f"{type(exc).__name__}: {exc}")
    return exc


async def summarize_url(
    target_url: str,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> SummarizeResponse:
    """Run the whole pipeline for one target URL."""
    if not target_url or not target_url.strip():
        raise ValidationError()
    ensure_configured(settings)

    start_time = time.monotonic()
    async with create_client(settings, transport) as client:
        fetched = await fetch_page(target_url, client, settings.request_timeout)
        content = normalize_text(fetched.body)
        logger.info(f"Normalized content: {len(content)} chars")
        summary = await summarize_text(content, settings, client)

    elapsed = time.monotonic() - start_time
    logger.info(f"Summary complete for {target_url} in {elapsed:.1f}s")
    return SummarizeResponse(url=target_url, summary=summary)
