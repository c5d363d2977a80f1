"""Shared fixtures: injected settings and a fake outbound HTTP layer."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from url_summarizer.config import Settings

TARGET_URL = "http://example.com/page-with-html"
GEMINI_URL = "https://llm.test/v1beta/models/test-model:generateContent"
PAGE_HTML = "<html><body>Hello <b>World</b></body></html>"
SUMMARY = "The page greets the world."


def gemini_reply(text: str = SUMMARY) -> dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class FakeWeb:
    """Answers target-page and summarization-API requests from canned values."""

    def __init__(self) -> None:
        self.page_status = 200
        self.page_body = PAGE_HTML
        self.page_error: Exception | None = None
        self.llm_status = 200
        self.llm_body: Any = gemini_reply()
        self.llm_error: Exception | None = None
        self.requests: list[httpx.Request] = []

    @property
    def llm_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) == GEMINI_URL]

    def llm_payload(self) -> dict[str, Any]:
        return json.loads(self.llm_requests[-1].content)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if str(request.url) == GEMINI_URL:
            if self.llm_error is not None:
                raise self.llm_error
            if isinstance(self.llm_body, str):
                return httpx.Response(self.llm_status, text=self.llm_body)
            return httpx.Response(self.llm_status, json=self.llm_body)
        if self.page_error is not None:
            raise self.page_error
        return httpx.Response(
            self.page_status,
            text=self.page_body,
            headers={"content-type": "text/html; charset=utf-8"},
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="test-key", gemini_api_url=GEMINI_URL)


@pytest.fixture
def fake_web() -> FakeWeb:
    return FakeWeb()
