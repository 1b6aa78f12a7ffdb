"""Tests for the best-effort review refiner (HTTP calls stubbed)."""
from __future__ import annotations

from typing import Any, Dict, List

import pytest
import requests

from bookshelf.services import review_refiner
from bookshelf.services.review_refiner import SYSTEM_PROMPT, ReviewRefiner


class _FakeResponse:
    def __init__(self, status_code: int, payload: Any = None, raise_json: bool = False):
        self.status_code = status_code
        self._payload = payload
        self._raise_json = raise_json

    def json(self):
        if self._raise_json:
            raise ValueError("not json")
        return self._payload


def _ok(content: str) -> _FakeResponse:
    return _FakeResponse(200, {"choices": [{"message": {"role": "assistant", "content": content}}]})


@pytest.fixture
def refiner():
    return ReviewRefiner("sk-test", api_base="https://llm.example.com/v1/", model="gpt-test", timeout=3)


def test_refine_posts_chat_completion_and_returns_content(monkeypatch, refiner):
    calls: List[Dict[str, Any]] = []

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        return _ok("  A polished review.  ")

    monkeypatch.setattr(review_refiner.requests, "post", fake_post)

    assert refiner.refine("good book") == "A polished review."
    assert len(calls) == 1
    call = calls[0]
    assert call["url"] == "https://llm.example.com/v1/chat/completions"
    assert call["timeout"] == 3
    assert call["headers"]["Authorization"] == "Bearer sk-test"
    assert call["json"]["model"] == "gpt-test"
    assert call["json"]["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert call["json"]["messages"][1] == {"role": "user", "content": "good book"}


def test_missing_key_returns_input_without_calling(monkeypatch):
    def boom(*_a, **_k):
        raise AssertionError("must not be called")

    monkeypatch.setattr(review_refiner.requests, "post", boom)
    unconfigured = ReviewRefiner(None)

    assert unconfigured.enabled is False
    assert unconfigured.refine("keep me") == "keep me"


@pytest.mark.parametrize(
    "outcome",
    [
        requests.Timeout("slow"),
        requests.ConnectionError("down"),
        _FakeResponse(429, {"error": "quota"}),
        _FakeResponse(500, {"error": "boom"}),
        _FakeResponse(200, raise_json=True),
        _FakeResponse(200, {"choices": []}),
        _FakeResponse(200, {"choices": [{"message": {"content": "   "}}]}),
    ],
)
def test_failures_fall_back_to_original_text(monkeypatch, refiner, outcome):
    def fake_post(*_a, **_k):
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(review_refiner.requests, "post", fake_post)

    assert refiner.refine("original text") == "original text"


def test_blank_text_is_returned_unchanged(monkeypatch, refiner):
    monkeypatch.setattr(review_refiner.requests, "post", lambda *_a, **_k: _ok("should not happen"))
    assert refiner.refine("   ") == "   "


def test_from_config_reads_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_API_BASE", "https://proxy.example.com/v1/")
    monkeypatch.setenv("BOOKSHELF_AI_MODEL", "gpt-mini")
    monkeypatch.setenv("BOOKSHELF_AI_TIMEOUT", "7.5")

    configured = ReviewRefiner.from_config()

    assert configured.enabled is True
    assert configured.api_base == "https://proxy.example.com/v1"
    assert configured.model == "gpt-mini"
    assert configured.timeout == 7.5


def test_any_2xx_response_is_accepted(monkeypatch, refiner):
    accepted = _FakeResponse(201, {"choices": [{"message": {"content": "Tidied review."}}]})
    monkeypatch.setattr(review_refiner.requests, "post", lambda *_a, **_k: accepted)

    assert refiner.refine("messy review") == "Tidied review."
