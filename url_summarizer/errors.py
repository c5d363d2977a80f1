from typing import Any, Optional

from url_summarizer.config import MAX_ERROR_DETAIL_CHARS


def passthrough_status(upstream_status: int) -> int:
    """Reply status for a failed upstream call: its own 4xx/5xx, else 500."""
    if 400 <= upstream_status <= 599:
        return upstream_status
    return 500


class SummarizerError(Exception):
    """Base class for every failure the summarize workflow reports to a caller."""

    status_code: int = 500
    error: str = "Error processing request"

    def __init__(
        self,
        message: str = "",
        *,
        error: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Any = None,
    ) -> None:
        super().__init__(message or error or self.error)
        self.message = message
        if error is not None:
            self.error = error
        if status_code is not None:
            self.status_code = status_code
        if isinstance(details, str) and len(details) > MAX_ERROR_DETAIL_CHARS:
            details = details[:MAX_ERROR_DETAIL_CHARS] + "..."
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.details not in (None, ""):
            payload["details"] = self.details
        if self.message:
            payload["message"] = self.message
        return payload


class ValidationError(SummarizerError):
    """Request body is not valid JSON or carries no usable url (400)."""

    status_code = 400
    error = "URL is required"


class ConfigurationError(SummarizerError):
    """A required setting such as the API credential is absent (500)."""

    status_code = 500
    error = "Server is not configured"

    @classmethod
    def for_missing(cls, names: list[str]) -> "ConfigurationError":
        if len(names) == 1:
            label = f"{names[0]} environment variable is not set"
        else:
            label = f"Missing required environment variables: {', '.join(names)}"
        return cls(error=label)


class FetchError(SummarizerError):
    """Target URL could not be retrieved, or answered with a non-2xx status."""

    error = "Error fetching target URL"

    @classmethod
    def no_response(cls, message: str) -> "FetchError":
        return cls(message, error="No response received from target URL")


class UpstreamError(SummarizerError):
    """Summarization API failed or returned an unusable response."""

    error = "Error from summarization API"

    @classmethod
    def no_response(cls, message: str) -> "UpstreamError":
        return cls(message, error="No response received from summarization API")

    @classmethod
    def bad_shape(cls, message: str, details: Any = None) -> "UpstreamError":
        return cls(message, error="Unexpected summarization API response", details=details)


class UnexpectedError(SummarizerError):
    """Anything else, caught at the outermost request boundary (500)."""

    status_code = 500
    error = "Unexpected error"
