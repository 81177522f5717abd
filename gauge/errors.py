"""Custom exception hierarchy for gauge.

All gauge-specific exceptions derive from GaugeError. Each exception
carries an optional ``context`` dict with structured metadata
(project path, provider name, model, etc.) that the CLI error
handler can render.

Exception hierarchy::

    GaugeError
    ├── WorkspaceNotFoundError
    ├── ProviderError
    │   ├── ProviderAuthError
    │   ├── ProviderQuotaError
    │   ├── ProviderModelError
    │   └── ProviderUnavailableError
    ├── ResponseParseError
    └── ConfigError
"""
from __future__ import annotations

from typing import Optional


class GaugeError(Exception):
    """Base class for all gauge exceptions.

    Args:
        message: Human-readable error description.
        context: Optional dict of structured metadata.
    """

    exit_code: int = 1

    def __init__(self, message: str, context: Optional[dict] = None):
        self.context = context or {}
        super().__init__(message)


# ── Workspace ──────────────────────────────────────────────────────

class WorkspaceNotFoundError(GaugeError):
    """Raised when the project root to analyze is missing or not a directory."""

    def __init__(self, path: str):
        super().__init__(
            f"No project workspace at '{path}'",
            context={"path": path},
        )


# ── Provider Errors ────────────────────────────────────────────────

class ProviderError(GaugeError):
    """Base class for AI provider errors."""

    def __init__(
        self,
        message: str,
        provider: str = "",
        model: str = "",
        context: Optional[dict] = None,
    ):
        ctx = {"provider": provider, "model": model}
        if context:
            ctx.update(context)
        super().__init__(message, context=ctx)


class ProviderAuthError(ProviderError):
    """The provider rejected the API key."""


class ProviderQuotaError(ProviderError):
    """Quota or rate limit hit."""


class ProviderModelError(ProviderError):
    """The configured model does not exist for this provider."""


class ProviderUnavailableError(ProviderError):
    """The provider cannot serve requests in its current setup."""


# ── Response Errors ────────────────────────────────────────────────

class ResponseParseError(GaugeError):
    """Raised when a provider response holds no usable JSON object."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message, context={"raw": raw[:100]})
        self.raw = raw


class ConfigError(GaugeError):
    """A config value has the wrong type or a command was refused."""
