"""Google Gemini wrapper used to write author intelligence reports."""

from __future__ import annotations

import logging

from google import genai
from google.genai import types

from research_radar.settings import DEFAULT_GEMINI_MODEL

logger = logging.getLogger(__name__)


class GeminiAnalyst:
    """Send a prompt to a Gemini model and return the raw text answer."""

    def __init__(self, api_key: str, *, model_name: str = DEFAULT_GEMINI_MODEL, timeout: float = 60.0):
        if not api_key:
            logger.warning("GEMINI_API_KEY is not set - analysis requests will fail")
        self.model_name = model_name
        self._api_key = api_key
        # HttpOptions.timeout is expressed in milliseconds.
        self._http_options = types.HttpOptions(timeout=int(timeout * 1000))
        self._client = None

    @property
    def client(self) -> genai.Client:
        # The SDK refuses to build a client without a key, so defer until first use.
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key, http_options=self._http_options)
            logger.info("Gemini client initialized for model %s", self.model_name)
        return self._client

    def generate(self, prompt: str) -> str:
        response = self.client.models.generate_content(
            model=self.model_name,
            contents=prompt,
        )
        return response.text or ""
