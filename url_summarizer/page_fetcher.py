import asyncio
import logging
from dataclasses import dataclass
from typing import AsyncGenerator, Optional
from contextlib import asynccontextmanager

import httpx

from url_summarizer.config import REQUEST_TIMEOUT, Settings
from url_summarizer.errors import FetchError, passthrough_status

logger = logging.getLogger(__name__)

USER_AGENT = "url-summarizer/1.0"


@dataclass
class FetchedContent:
    body: str
    status_code: int
    content_type: str


@asynccontextmanager
async def create_client(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create the per-request httpx client shared by the fetch and summarize calls."""
    async with httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT},
        timeout=settings.request_timeout,
        follow_redirects=True,
        transport=transport,
    ) as client:
        yield client


async def fetch_page(
    url: str,
    client: httpx.AsyncClient,
    timeout: float = REQUEST_TIMEOUT,
) -> FetchedContent:
    """GET the target URL and return its full body as text.

    `timeout` bounds the whole call, body included, not each read.
    """
    logger.info(f"Fetching content from: {url}")

    try:
        response = await asyncio.wait_for(client.get(url), timeout=timeout)
    except asyncio.TimeoutError:
        raise FetchError.no_response(f"Timed out after {timeout}s fetching {url}") from None
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        raise FetchError.no_response(f"Network error fetching {url}: {exc}") from exc

    if not response.is_success:
        logger.warning(f"Target responded with status {response.status_code}: {url}")
        raise FetchError(
            f"Target URL responded with status {response.status_code}",
            status_code=passthrough_status(response.status_code),
            details=response.text,
        )

    content_type = response.headers.get("content-type", "")
    logger.debug(f"Fetched {len(response.content)} bytes ({content_type or 'unknown type'})")
    return FetchedContent(
        body=response.text,
        status_code=response.status_code,
        content_type=content_type,
    )
