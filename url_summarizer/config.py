import os
import logging
from dataclasses import dataclass

from dotenv import load_dotenv

# --- Summarization API ---
DEFAULT_GEMINI_API_URL: str = (
    "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent"
)

# --- LLM parameters ---
LLM_TEMPERATURE: float = 0.2
LLM_MAX_TOKENS: int = 100

# --- Content normalization ---
MAX_CONTENT_CHARS: int = 10_000
TRUNCATION_MARKER: str = "..."

# --- Timeouts ---
REQUEST_TIMEOUT: float = 30.0  # per outbound HTTP request (seconds)

# --- Error reporting ---
MAX_ERROR_DETAIL_CHARS: int = 2_000  # upstream body echoed back in error payloads

# --- Server ---
DEFAULT_PORT: int = 3000

REQUIRED_ENV_VARS: tuple[str, ...] = ("GEMINI_API_KEY", "GEMINI_API_URL")


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str = ""
    gemini_api_url: str = ""
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    request_timeout: float = REQUEST_TIMEOUT

    def missing(self) -> list[str]:
        """Names of required environment variables that are not set."""
        values = {
            "GEMINI_API_KEY": self.gemini_api_key,
            "GEMINI_API_URL": self.gemini_api_url,
        }
        return [name for name in REQUIRED_ENV_VARS if not values[name]]


def load_settings(default_api_url: str = "") -> Settings:
    """Read settings from the process environment (and .env, if present)."""
    load_dotenv()
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY", "").strip(),
        gemini_api_url=os.getenv("GEMINI_API_URL", "").strip() or default_api_url,
        port=int(os.getenv("PORT", str(DEFAULT_PORT))),
        log_level=os.getenv("LOG_LEVEL", "info").upper(),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", str(REQUEST_TIMEOUT))),
    )


def configure_logging(log_level: str = "INFO") -> None:
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
