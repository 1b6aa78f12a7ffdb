"""Best-effort AI rewrite of review text.

`ReviewRefiner.refine` posts the text to an OpenAI-compatible chat-completions
endpoint and returns the rewritten text. Missing credentials, network errors,
timeouts, non-2xx responses and malformed payloads all return the input
unchanged; the call is bounded by the configured timeout.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from bookshelf import config
from bookshelf.utils.logging import get_logger

LOG = get_logger("review_refiner")

SYSTEM_PROMPT = (
    "You are a book review editor. Your job is to refine the review while maintaining "
    "the original sentiment, opinion, and rating. Improve grammar, clarity, and tone. "
    "Make the review more engaging and well-structured. Do not add information or "
    "change the user's opinion. Simply improve the writing quality."
)
_TEMPERATURE = 0.7
_MAX_TOKENS = 1000


def _extract_content(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if isinstance(content, str) and content.strip():
        return content.strip()
    return None


class ReviewRefiner:
    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        api_base: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.api_key = api_key
        self.api_base = (api_base or config.DEFAULT_OPENAI_API_BASE).rstrip("/")
        self.model = model or config.DEFAULT_AI_MODEL
        self.timeout = timeout if timeout is not None else config.DEFAULT_AI_TIMEOUT

    @classmethod
    def from_config(cls) -> "ReviewRefiner":
        return cls(
            config.openai_api_key(),
            api_base=config.openai_api_base(),
            model=config.ai_model(),
            timeout=config.ai_timeout(),
        )

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _body(self, text: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": text},
            ],
            "temperature": _TEMPERATURE,
            "max_tokens": _MAX_TOKENS,
        }

    def refine(self, text: str) -> str:
        if not text or not text.strip():
            return text
        if not self.enabled:
            LOG.warning("OPENAI_API_KEY not set; returning original review content")
            return text
        try:
            r = requests.post(
                f"{self.api_base}/chat/completions",
                json=self._body(text),
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.Timeout:
            LOG.warning("Review refinement timed out after %ss", self.timeout)
            return text
        except requests.RequestException as exc:
            LOG.warning("Review refinement request failed error=%s", exc)
            return text
        if r.status_code == 429:
            LOG.warning("Review refinement rate limited or out of quota; skipping")
            return text
        if not 200 <= r.status_code < 300:
            LOG.warning("Review refinement http_error status=%s", r.status_code)
            return text
        try:
            data = r.json()
        except ValueError:
            LOG.warning("Review refinement returned non-JSON body")
            return text
        refined = _extract_content(data)
        if refined is None:
            LOG.warning("Review refinement returned no content")
            return text
        return refined


__all__ = ["ReviewRefiner", "SYSTEM_PROMPT"]
