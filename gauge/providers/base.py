"""AI Provider Protocol, Base Class and the unavailable stand-in."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class AIProvider(Protocol):
    """Protocol that all AI providers must satisfy."""

    name: str
    model: str

    def is_available(self) -> bool: ...
    def chat(self, system: str, user: str, max_tokens: int = 4000) -> str: ...


class BaseProvider:
    """Common base for AI providers to reduce initialization boilerplate."""

    name: str = ""

    def __init__(self):
        from gauge.core.config_service import get_config_service
        from gauge.core.secrets import get_key

        config_svc = get_config_service()
        self.api_key = get_key(self.name) if self.name else None
        self.model = config_svc.get_provider_model(self.name) if self.name else ""

    def is_available(self) -> bool:
        return self.api_key is not None


class UnavailableProvider:
    """A provider that could not be initialized.

    Returned by ``gauge.providers.connect`` instead of None so callers can
    branch on the type. Analyzers never call ``chat`` on it.
    """

    def __init__(self, name: str, reason: str):
        self.name = name
        self.model = ""
        self.reason = reason

    def is_available(self) -> bool:
        return False

    def chat(self, system: str, user: str, max_tokens: int = 4000) -> str:
        from gauge.errors import ProviderUnavailableError
        raise ProviderUnavailableError(self.reason, provider=self.name)

    def __repr__(self) -> str:
        return f"UnavailableProvider(name={self.name!r}, reason={self.reason!r})"
