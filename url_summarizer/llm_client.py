import asyncio
import logging
from typing import Any

import httpx

from url_summarizer.config import LLM_MAX_TOKENS, LLM_TEMPERATURE, Settings
from url_summarizer.errors import ConfigurationError, UpstreamError, passthrough_status
from url_summarizer.prompts import SUMMARIZE_PROMPT_TEMPLATE

logger = logging.getLogger(__name__)


def ensure_configured(settings: Settings) -> None:
    """Raise ConfigurationError unless both the API key and endpoint are set."""
    missing = settings.missing()
    if missing:
        raise ConfigurationError.for_missing(missing)


def build_prompt(content: str) -> str:
    return SUMMARIZE_PROMPT_TEMPLATE.format(content=content)


def build_payload(prompt: str) -> dict[str, Any]:
    """Request body for the Gemini generateContent endpoint."""
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": LLM_TEMPERATURE,
            "maxOutputTokens": LLM_MAX_TOKENS,
        },
    }


def extract_summary(data: Any) -> str:
    """Pull the first candidate's text out of a generateContent response."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        reason = ""
        if isinstance(data, dict):
            reason = (data.get("promptFeedback") or {}).get("blockReason", "")
        message = "Response contained no candidate text"
        if reason:
            message += f" (prompt blocked: {reason})"
        raise UpstreamError.bad_shape(message, details=data) from None

    if not isinstance(text, str):
        raise UpstreamError.bad_shape("Candidate text is not a string", details=data)
    return text


async def summarize_text(
    content: str,
    settings: Settings,
    client: httpx.AsyncClient,
) -> str:
    """Ask the summarization API for a one-sentence summary of `content`."""
    ensure_configured(settings)

    payload = build_payload(build_prompt(content))
    logger.info("Sending content to summarization API")
    try:
        response = await asyncio.wait_for(
            client.post(
                settings.gemini_api_url,
                json=payload,
                headers={"x-goog-api-key": settings.gemini_api_key},
            ),
            timeout=settings.request_timeout,
        )
    except asyncio.TimeoutError:
        raise UpstreamError.no_response(
            f"Timed out after {settings.request_timeout}s calling summarization API"
        ) from None
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        raise UpstreamError.no_response(f"Network error calling summarization API: {exc}") from exc

    if not response.is_success:
        logger.warning(f"Summarization API responded with status {response.status_code}")
        raise UpstreamError(
            f"Summarization API responded with status {response.status_code}",
            status_code=passthrough_status(response.status_code),
            details=response.text,
        )

    try:
        data = response.json()
    except ValueError:
        raise UpstreamError.bad_shape("Response body is not JSON", details=response.text) from None

    summary = extract_summary(data)
    logger.debug(f"Summary received ({len(summary)} chars)")
    return summary
