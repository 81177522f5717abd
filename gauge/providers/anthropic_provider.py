"""Anthropic (Claude) AI provider."""

from __future__ import annotations

import logging

from .base import BaseProvider

logger = logging.getLogger("gauge.providers.anthropic")

ANTHROPIC_MODELS = {
    "claude-sonnet-4-5-20250514": "Fast, intelligent (default)",
    "claude-opus-4-20250514": "Most capable, complex tasks",
    "claude-haiku-3-5-20241022": "Fastest, lowest cost",
}


class AnthropicProvider(BaseProvider):
    name = "anthropic"

    def chat(self, system: str, user: str, max_tokens: int = 4000) -> str:
        """Send a chat message and return the response text ("" when empty)."""
        import anthropic

        from gauge.errors import (
            ProviderAuthError,
            ProviderError,
            ProviderModelError,
            ProviderQuotaError,
            ProviderUnavailableError,
        )

        client = anthropic.Anthropic(api_key=self.api_key)

        kwargs = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": user}],
        }
        if system:
            kwargs["system"] = system

        try:
            message = client.messages.create(**kwargs)
        except anthropic.AuthenticationError as e:
            raise ProviderAuthError(
                "Anthropic API key is invalid or expired.\n"
                "Check ANTHROPIC_API_KEY or run: gauge config set-key anthropic",
                provider=self.name,
                model=self.model,
            ) from e
        except anthropic.RateLimitError as e:
            raise ProviderQuotaError(
                "Anthropic rate limit exceeded. Wait and retry.",
                provider=self.name,
                model=self.model,
            ) from e
        except anthropic.NotFoundError as e:
            raise ProviderModelError(
                f"Model '{self.model}' not found on Anthropic.",
                provider=self.name,
                model=self.model,
            ) from e
        except anthropic.APIConnectionError as e:
            raise ProviderUnavailableError(
                f"Cannot reach the Anthropic API: {e}",
                provider=self.name,
                model=self.model,
            ) from e
        except anthropic.APIError as e:
            raise ProviderError(
                f"Anthropic API error: {e}",
                provider=self.name,
                model=self.model,
            ) from e

        texts = [block.text for block in message.content if getattr(block, "type", "") == "text"]
        return "".join(texts)
