"""Entry point discovery for provider plugins.

A package adds a provider by declaring, in its ``pyproject.toml``::

    [project.entry-points."gauge.providers"]
    openai = "gauge_openai:OpenAIProvider"

The class is instantiated with no arguments and must satisfy
``gauge.providers.base.AIProvider``. Once installed it can be picked with
``gauge --provider openai analyze``.
"""

from __future__ import annotations

import logging
from importlib.metadata import EntryPoint, entry_points
from typing import Any

logger = logging.getLogger("gauge.plugins")

PROVIDER_GROUP = "gauge.providers"


def _load(ep: EntryPoint) -> Any:
    target = ep.load()
    logger.debug("Loaded plugin %s from %s", ep.name, ep.value)
    return target


def discover_plugins(group: str) -> dict[str, Any]:
    """Load every entry point in ``group``, keyed by entry point name.

    A plugin that fails to import is logged and left out.
    """
    found: dict[str, Any] = {}
    for ep in entry_points(group=group):
        try:
            found[ep.name] = _load(ep)
        except Exception as e:
            logger.warning("Skipping plugin %s (%s): %s", ep.name, ep.value, e)
    return found


def discover_providers() -> dict[str, type]:
    return discover_plugins(PROVIDER_GROUP)
