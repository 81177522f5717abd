"""AI provider registry and connection.

Providers are discovered via setuptools entry points (group ``gauge.providers``).
Built-in providers (gemini, anthropic, ollama) are registered in pyproject.toml
and are imported directly when running from an uninstalled checkout.

``connect()`` is the entry point for analysis runs: it always returns an
object satisfying ``AIProvider``, substituting an ``UnavailableProvider``
when the requested provider cannot be initialized.
"""
from __future__ import annotations

import importlib
import logging
from typing import Optional

# Loads .env before any provider reads its key
import gauge.config  # noqa: F401
from gauge import plugins

from .base import AIProvider, UnavailableProvider

logger = logging.getLogger("gauge.providers")

# Filled on first use, from entry points or BUILTIN_PROVIDERS
PROVIDERS: dict[str, type] = {}

# Used when the package metadata is missing, e.g. a source checkout on sys.path
BUILTIN_PROVIDERS = {
    "anthropic": ".anthropic_provider:AnthropicProvider",
    "gemini": ".gemini_provider:GeminiProvider",
    "ollama": ".ollama_provider:OllamaProvider",
}


def _register_defaults():
    if PROVIDERS:
        return

    discovered = plugins.discover_providers()
    if discovered:
        PROVIDERS.update(discovered)
        logger.debug("Providers from entry points: %s", ", ".join(sorted(discovered)))
        return

    logger.debug("No provider entry points installed, using built-ins")
    for name, target in BUILTIN_PROVIDERS.items():
        module_name, _, class_name = target.partition(":")
        module = importlib.import_module(module_name, __name__)
        PROVIDERS[name] = getattr(module, class_name)


def _resolve_name(name: Optional[str]) -> str:
    if name:
        return name
    from gauge.core.config_service import get_config_service
    return get_config_service().get_provider_name()


def get_provider(name: Optional[str] = None) -> AIProvider:
    """Construct an AI provider instance.

    Args:
        name: Provider name to use. If None, reads from config.

    Returns:
        An AI provider instance with a chat() method.

    Raises:
        ProviderUnavailableError: If provider name is unknown.
    """
    _register_defaults()
    name = _resolve_name(name)

    if name not in PROVIDERS:
        from gauge.errors import ProviderUnavailableError
        available = ", ".join(sorted(PROVIDERS.keys()))
        raise ProviderUnavailableError(
            f"Unknown provider '{name}'. Available: {available}",
            provider=name,
        )
    return PROVIDERS[name]()


def connect(name: Optional[str] = None) -> AIProvider:
    """Initialize the provider for an analysis run.

    Never raises: any failure is logged and returned as an
    ``UnavailableProvider`` carrying the reason.
    """
    name = _resolve_name(name)
    try:
        provider = get_provider(name)
    except Exception as e:
        logger.error("Failed to initialize AI provider '%s': %s", name, e)
        return UnavailableProvider(name, str(e))

    if not provider.is_available():
        from gauge.core.secrets import PROVIDER_KEY_ENV
        env_var = PROVIDER_KEY_ENV.get(name)
        if env_var:
            reason = f"Provider '{name}' requires {env_var} to be set."
        else:
            reason = f"Provider '{name}' is not reachable."
        logger.error("Failed to initialize AI provider '%s': %s", name, reason)
        return UnavailableProvider(name, reason)

    logger.info("Using AI provider %s (%s)", name, provider.model)
    return provider


def get_provider_names() -> list[str]:
    """Get sorted list of all registered provider names."""
    _register_defaults()
    return sorted(PROVIDERS.keys())


__all__ = [
    "AIProvider",
    "PROVIDERS",
    "UnavailableProvider",
    "connect",
    "get_provider",
    "get_provider_names",
]
