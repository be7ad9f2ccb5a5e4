"""Gemini generateContent client for advisory requests."""

import logging

import httpx

from oceanova.errors import AdvisoryError, AdvisoryFailure, ConfigurationError, TransportError

logger = logging.getLogger(__name__)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash-preview-05-20"
SERVICE_NAME = "gemini"


class GeminiClient:
    """Thin wrapper around the generateContent REST endpoint.

    One call is one attempt; retrying is the caller's job.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = GEMINI_API_BASE,
        timeout: float = 60.0,
    ):
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY not set")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(self, body: dict) -> dict:
        """POST a request body and return the decoded response envelope.

        Raises TransportError on network failure or non-2xx status.
        """
        try:
            resp = httpx.post(
                self.url,
                params={"key": self.api_key},
                headers={"Content-Type": "application/json"},
                json=body,
                timeout=self.timeout,
            )
        except httpx.RequestError as e:
            raise TransportError(f"Advisory request failed: {e}", service=SERVICE_NAME) from e

        if not resp.is_success:
            raise TransportError(
                f"Advisory request failed: HTTP {resp.status_code}",
                service=SERVICE_NAME,
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise AdvisoryError(
                AdvisoryFailure.EMPTY_RESPONSE,
                f"Advisory response envelope is not JSON: {e}",
            ) from e


def extract_text(envelope: dict) -> str | None:
    """Text at candidates[0].content.parts[0].text, or None if absent."""
    try:
        text = envelope["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text.strip():
        return None
    return text
