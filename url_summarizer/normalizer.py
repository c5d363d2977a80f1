import logging
import re

from url_summarizer.config import MAX_CONTENT_CHARS, TRUNCATION_MARKER

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_tags(text: str) -> str:
    """Replace every markup tag with a single space."""
    return _TAG_RE.sub(" ", text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def truncate(text: str, limit: int = MAX_CONTENT_CHARS) -> str:
    """Cut text to `limit` characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    logger.info(f"Content truncated from {len(text)} to {limit} characters")
    return text[:limit] + TRUNCATION_MARKER


def normalize_text(raw: str) -> str:
    """Turn fetched page text into plain prompt text.

    Tags are blanked out, not parsed: script and style bodies survive as text.
    """
    return truncate(collapse_whitespace(strip_tags(raw)))
