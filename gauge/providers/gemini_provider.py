"""Google Gemini provider, built on the google-genai SDK."""
from __future__ import annotations

import logging

from google import genai
from google.genai import types

from gauge.errors import (
    ProviderAuthError,
    ProviderError,
    ProviderModelError,
    ProviderQuotaError,
)

from .base import BaseProvider

logger = logging.getLogger("gauge.providers.gemini")

GEMINI_MODELS = {
    "gemini-2.0-flash": "Fast, versatile (default)",
    "gemini-2.0-flash-lite": "Fastest, lowest cost",
    "gemini-1.5-flash": "Previous gen fast model",
    "gemini-2.5-flash": "Fast thinking model",
    "gemini-2.5-pro": "Most capable, thinking model",
    "gemini-1.5-pro": "Previous gen pro model",
}

# The SDK raises generic errors; classify them by message text.
_ERROR_MARKERS: tuple[tuple[type[ProviderError], tuple[str, ...]], ...] = (
    (ProviderQuotaError, ("quota", "resource_exhausted", "429")),
    (ProviderAuthError, ("api key not valid", "api_key_invalid", "invalid api key")),
    (ProviderModelError, ("not found", "does not exist")),
)


class GeminiProvider(BaseProvider):
    name = "gemini"

    def __init__(self):
        super().__init__()
        self._client = None

    @property
    def client(self):
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def chat(self, system: str, user: str, max_tokens: int = 4000) -> str:
        config = types.GenerateContentConfig(
            system_instruction=system or None,
            max_output_tokens=max_tokens,
        )
        try:
            response = self.client.models.generate_content(
                model=self.model, contents=user, config=config
            )
        except Exception as e:
            raise self._translate(e) from e
        return response.text or ""

    def _translate(self, exc: Exception) -> ProviderError:
        """Turn an SDK failure into the matching ProviderError."""
        text = str(exc).lower()
        error_cls = next(
            (cls for cls, markers in _ERROR_MARKERS if any(m in text for m in markers)),
            ProviderError,
        )
        if error_cls is ProviderQuotaError:
            message = (
                "Gemini quota exceeded. See "
                "https://ai.google.dev/gemini-api/docs/rate-limits"
            )
        elif error_cls is ProviderAuthError:
            message = (
                "Gemini rejected the API key. Check GOOGLE_API_KEY or run: "
                "gauge config set-key gemini"
            )
        elif error_cls is ProviderModelError:
            choices = ", ".join(GEMINI_MODELS)
            message = (
                f"Model '{self.model}' not found. Try one of: {choices} "
                "(set with GEMINI_MODEL or --model)"
            )
        else:
            message = f"Gemini API error: {exc}"
        logger.debug("Gemini call failed: %s", exc)
        return error_cls(message, provider=self.name, model=self.model)
