"""Configuration for gauge runs.

Settings come from five layers, each overriding the one before it::

    built-in DEFAULTS
    ~/.config/gauge/config.toml        global
    ./.gauge.toml                      project (current directory)
    environment variables              see ENV_OVERRIDES
    CLI flags                          the CLI callback exports them as env vars

Keys are addressed with dots: ``providers.gemini.model``,
``analysis.exclude``.
"""
from __future__ import annotations

import copy
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import tomli_w

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from gauge.errors import ConfigError

logger = logging.getLogger("gauge.config")

DEFAULTS: dict[str, Any] = {
    "providers": {
        "default": "gemini",
        "gemini": {"model": "gemini-2.0-flash"},
        "anthropic": {"model": "claude-sonnet-4-5-20250514"},
        "ollama": {"model": "llama3.2", "endpoint": "http://localhost:11434"},
    },
    "analysis": {
        "ignore_file": ".gitignore",
        "exclude": [".git/"],
        "max_tokens": 1024,
    },
    "ui": {
        "plain_output": False,
    },
}

# (env var, dotted key, parse "true"/"1"/"no"... as a flag)
# Applied in order, so GAUGE_PROVIDER beats the AI_PROVIDER alias.
ENV_OVERRIDES: tuple[tuple[str, str, bool], ...] = (
    ("AI_PROVIDER", "providers.default", False),
    ("GAUGE_PROVIDER", "providers.default", False),
    ("GEMINI_MODEL", "providers.gemini.model", False),
    ("ANTHROPIC_MODEL", "providers.anthropic.model", False),
    ("OLLAMA_MODEL", "providers.ollama.model", False),
    ("OLLAMA_ENDPOINT", "providers.ollama.endpoint", False),
    ("GAUGE_IGNORE_FILE", "analysis.ignore_file", False),
    ("GAUGE_PLAIN", "ui.plain_output", True),
)

_TRUE_WORDS = ("true", "1", "yes")
_FALSE_WORDS = ("false", "0", "no")


def _global_config_dir() -> Path:
    return Path.home() / ".config" / "gauge"


def _global_config_path() -> Path:
    return _global_config_dir() / "config.toml"


def _project_config_path() -> Path:
    return Path.cwd() / ".gauge.toml"


def _read_toml(path: Path) -> dict:
    """Load a TOML file; a missing or broken file counts as empty."""
    if not path.is_file():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}


def _write_toml(data: dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        tomli_w.dump(data, f)


def _deep_merge(base: dict, override: dict) -> dict:
    """Return a new dict with ``override`` layered onto ``base``.

    Nested tables merge key by key; anything else, lists included, is
    replaced wholesale.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _get_nested(data: dict, dotted_key: str, default: Any = None) -> Any:
    node: Any = data
    for part in dotted_key.split("."):
        if not isinstance(node, dict) or node.get(part) is None:
            return default
        node = node[part]
    return node


def _set_nested(data: dict, dotted_key: str, value: Any) -> None:
    *parents, leaf = dotted_key.split(".")
    node = data
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[leaf] = value


def _coerce_env_value(env_var: str, value: str) -> Any:
    """Interpret an env var value; only flag variables become booleans."""
    is_flag = next((flag for name, _, flag in ENV_OVERRIDES if name == env_var), False)
    if not is_flag:
        return value
    lowered = value.lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    return value


@dataclass
class ResolvedConfig:
    """Merged settings plus the config files that contributed to them."""
    data: dict = field(default_factory=dict)
    global_config_path: Optional[Path] = None
    project_config_path: Optional[Path] = None

    def get(self, dotted_key: str, default: Any = None) -> Any:
        return _get_nested(self.data, dotted_key, default)


@dataclass(frozen=True)
class AnalysisSettings:
    """The ``[analysis]`` table, validated."""
    ignore_file: str
    exclude: tuple[str, ...]
    max_tokens: int


class ConfigService:
    """Resolves and edits gauge configuration.

    The merged result is cached until ``resolve(force=True)`` or a write
    through ``set_global``.
    """

    def __init__(self):
        self._resolved: Optional[ResolvedConfig] = None

    def resolve(self, force: bool = False) -> ResolvedConfig:
        if self._resolved is not None and not force:
            return self._resolved

        merged = copy.deepcopy(DEFAULTS)
        found: dict[str, Optional[Path]] = {}
        for layer, path in (("global", _global_config_path()), ("project", _project_config_path())):
            layer_data = _read_toml(path)
            if layer_data:
                merged = _deep_merge(merged, layer_data)
                logger.debug("Applied %s config %s", layer, path)
            found[layer] = path if path.is_file() else None

        for env_var, dotted_key, _ in ENV_OVERRIDES:
            raw = os.environ.get(env_var)
            # Empty values count as unset
            if raw:
                _set_nested(merged, dotted_key, _coerce_env_value(env_var, raw))

        self._resolved = ResolvedConfig(
            data=merged,
            global_config_path=found["global"],
            project_config_path=found["project"],
        )
        return self._resolved

    def get(self, dotted_key: str, default: Any = None) -> Any:
        return self.resolve().get(dotted_key, default)

    # ── Providers ──

    def get_provider_name(self) -> str:
        return self.get("providers.default", "gemini")

    def get_provider_model(self, provider: Optional[str] = None) -> str:
        """Model id configured for ``provider`` (the active one by default)."""
        name = provider or self.get_provider_name()
        return self.get(f"providers.{name}.model", "")

    # ── Analysis ──

    def get_ignore_file(self) -> str:
        return str(self.get("analysis.ignore_file", ".gitignore"))

    def get_exclude_patterns(self) -> list[str]:
        """Patterns excluded on top of the project's ignore file.

        Raises:
            ConfigError: If ``analysis.exclude`` is neither a list nor a string.
        """
        patterns = self.get("analysis.exclude", [])
        if isinstance(patterns, str):
            patterns = [patterns]
        if not isinstance(patterns, list):
            raise ConfigError(
                f"analysis.exclude must be a list of patterns, got {type(patterns).__name__}",
                context={"key": "analysis.exclude"},
            )
        return [str(p) for p in patterns]

    def get_max_tokens(self) -> int:
        value = self.get("analysis.max_tokens", 1024)
        if isinstance(value, bool):
            value = None
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(
                f"analysis.max_tokens must be an integer, got {value!r}",
                context={"key": "analysis.max_tokens"},
            ) from e

    def analysis_settings(self) -> AnalysisSettings:
        return AnalysisSettings(
            ignore_file=self.get_ignore_file(),
            exclude=tuple(self.get_exclude_patterns()),
            max_tokens=self.get_max_tokens(),
        )

    def is_plain_output(self) -> bool:
        return bool(self.get("ui.plain_output", False))

    # ── Writing ──

    def set_global(self, dotted_key: str, value: Any) -> None:
        """Persist one value to the global config file."""
        path = _global_config_path()
        data = _read_toml(path)
        _set_nested(data, dotted_key, value)
        _write_toml(data, path)
        self._resolved = None
        logger.info("Wrote %s = %r to %s", dotted_key, value, path)

    def init_project_config(self) -> Path:
        """Write a starter ``.gauge.toml`` into the current directory.

        Raises:
            FileExistsError: If the project already has one.
        """
        path = _project_config_path()
        if path.exists():
            raise FileExistsError(f"Project config already exists: {path}")
        _write_toml(
            {
                "providers": {"default": DEFAULTS["providers"]["default"]},
                "analysis": copy.deepcopy(DEFAULTS["analysis"]),
            },
            path,
        )
        logger.info("Created project config %s", path)
        return path

    # ── Introspection ──

    def show(self) -> dict:
        resolved = self.resolve(force=True)
        sources = {
            "global_config": resolved.global_config_path,
            "project_config": resolved.project_config_path,
        }
        return {
            "resolved": resolved.data,
            "sources": {name: str(path) if path else None for name, path in sources.items()},
        }

    def config_paths(self) -> dict[str, str]:
        """Every file gauge reads settings or keys from, with its status."""
        paths = {
            "global_config": _global_config_path(),
            "project_config": _project_config_path(),
            "credentials": _global_config_dir() / "credentials",
        }
        return {
            name: f"{path} ({'exists' if path.is_file() else 'not found'})"
            for name, path in paths.items()
        }


_config_service: Optional[ConfigService] = None


def get_config_service() -> ConfigService:
    """Process-wide ConfigService, created on first use."""
    global _config_service
    if _config_service is None:
        _config_service = ConfigService()
    return _config_service


def reset_config_service() -> None:
    """Drop the cached service so the next call re-reads every layer."""
    global _config_service
    _config_service = None
