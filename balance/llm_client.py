import logging
from typing import Any, Dict, Optional

import requests

from balance.config import GEMINI_API_BASE_URL, GEMINI_MODEL
from balance.errors import MissingCredentialError, ResponseFormatError

logger = logging.getLogger(__name__)


class GeminiClient:
    """
    Thin wrapper around the Gemini ``generateContent`` REST endpoint.
    """

    def __init__(self, api_key: str, model: str = GEMINI_MODEL, base_url: str = GEMINI_API_BASE_URL):
        if not api_key:
            raise MissingCredentialError()
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.model}:generateContent"

    def generate(self, prompt: str, system_instruction: str, response_schema: Dict[str, Any]) -> Optional[str]:
        """
        Ask for JSON matching ``response_schema`` and return the raw text,
        or None when the response carries no text.
        """
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "systemInstruction": {"parts": [{"text": system_instruction}]},
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            },
        }

        logger.info("Calling Gemini model %s", self.model)
        resp = self.session.post(self.url, headers=headers, json=payload)
        resp.raise_for_status()
        text = extract_text(resp.json())
        if text:
            logger.info("Gemini response received (%d chars)", len(text))
        return text


def extract_text(data: Any) -> Optional[str]:
    """
    Pull the first candidate's text out of a generateContent response.

    Raises ResponseFormatError when the envelope is not shaped like one.
    """
    if not isinstance(data, dict):
        raise _bad_envelope("response body is not an object")

    candidates = data.get("candidates") or []
    if not isinstance(candidates, list):
        raise _bad_envelope("candidates is not a list")
    if not candidates:
        feedback = data.get("promptFeedback")
        reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
        logger.warning("Gemini returned no candidates (block reason: %s)", reason or "unknown")
        return None

    candidate = candidates[0]
    if not isinstance(candidate, dict):
        raise _bad_envelope("candidate is not an object")
    finish_reason = candidate.get("finishReason")
    if finish_reason and finish_reason != "STOP":
        logger.warning("Gemini finished with reason %s", finish_reason)

    content = candidate.get("content") or {}
    if not isinstance(content, dict):
        raise _bad_envelope("content is not an object")
    parts = content.get("parts") or []
    if not isinstance(parts, list) or not all(
        isinstance(part, dict) and isinstance(part.get("text") or "", str) for part in parts
    ):
        raise _bad_envelope("content parts are malformed")

    text = "".join(part.get("text") or "" for part in parts)
    return text or None


def _bad_envelope(detail: str) -> ResponseFormatError:
    logger.error("Unexpected Gemini response envelope: %s", detail)
    return ResponseFormatError.from_detail(f"unexpected response from the API ({detail})")


def describe_http_error(exc: requests.HTTPError) -> str:
    """Prefer the provider's own error message over the bare status line."""
    response = exc.response
    if response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            message = body["error"].get("message")
            if message:
                return message
    return str(exc)
