"""Ollama provider: local models over the Ollama REST API."""
from __future__ import annotations

import logging

import httpx

from gauge.errors import ProviderError, ProviderModelError, ProviderUnavailableError

logger = logging.getLogger("gauge.providers.ollama")

DEFAULT_ENDPOINT = "http://localhost:11434"

# Local models on CPU can take minutes per answer
CHAT_TIMEOUT = 300.0
PROBE_TIMEOUT = 5.0

# Listed by `gauge models`; any pulled model works
OLLAMA_MODELS = {
    "llama3.2": "Meta Llama 3.2 (3B, default)",
    "llama3.1": "Meta Llama 3.1 (8B)",
    "mistral": "Mistral 7B",
    "codellama": "Code Llama",
    "qwen2.5-coder": "Alibaba Qwen 2.5 Coder",
    "deepseek-coder-v2": "DeepSeek Coder V2",
}


class OllamaProvider:
    """Talks to an Ollama server; needs no API key."""

    name = "ollama"

    def __init__(self):
        from gauge.core.config_service import get_config_service

        config = get_config_service()
        self.model = config.get_provider_model(self.name)
        self.endpoint = config.get("providers.ollama.endpoint", DEFAULT_ENDPOINT).rstrip("/")

    def _url(self, route: str) -> str:
        return f"{self.endpoint}/api/{route}"

    def _error(self, cls: type[ProviderError], message: str) -> ProviderError:
        return cls(message, provider=self.name, model=self.model)

    def is_available(self) -> bool:
        try:
            response = httpx.get(self._url("tags"), timeout=PROBE_TIMEOUT)
        except httpx.HTTPError as e:
            logger.debug("Ollama not reachable at %s: %s", self.endpoint, e)
            return False
        return response.status_code == 200

    def chat(self, system: str, user: str, max_tokens: int = 4000) -> str:
        """One non-streaming chat turn; the system message is omitted when empty."""
        messages = [{"role": "system", "content": system}] if system else []
        messages.append({"role": "user", "content": user})
        payload = {
            "model": self.model,
            "messages": messages,
            "stream": False,
            "options": {"num_predict": max_tokens},
        }

        try:
            response = httpx.post(self._url("chat"), json=payload, timeout=CHAT_TIMEOUT)
            response.raise_for_status()
        except httpx.ConnectError as e:
            raise self._error(
                ProviderUnavailableError,
                f"Cannot connect to Ollama at {self.endpoint}. Start it with: ollama serve",
            ) from e
        except httpx.TimeoutException as e:
            raise self._error(
                ProviderUnavailableError,
                f"Ollama request timed out after {CHAT_TIMEOUT:.0f}s with model '{self.model}'.",
            ) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                raise self._error(
                    ProviderModelError,
                    f"Model '{self.model}' not found on Ollama. Pull it with: ollama pull {self.model}",
                ) from e
            raise self._error(
                ProviderError, f"Ollama API error (HTTP {status}): {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise self._error(ProviderError, f"Ollama error: {e}") from e

        message = response.json().get("message") or {}
        return message.get("content") or ""

    def list_models(self) -> list[dict]:
        """Models pulled on the server, or [] when it cannot be asked."""
        try:
            response = httpx.get(self._url("tags"), timeout=10.0)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Could not list Ollama models: %s", e)
            return []
        return response.json().get("models", [])
