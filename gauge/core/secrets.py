"""API key storage for the cloud providers.

A key is looked up in three places, first hit wins:

1. the provider's environment variable (``GOOGLE_API_KEY``, ``ANTHROPIC_API_KEY``)
2. the system keyring, service ``gauge``
3. ``~/.config/gauge/credentials``, one ``ENV_VAR=value`` per line, mode 0600

New keys go to the keyring when one is usable and to the credentials file
otherwise.
"""
from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Optional

import keyring

logger = logging.getLogger("gauge.secrets")

KEYRING_SERVICE = "gauge"

# None means the provider runs without a key
PROVIDER_KEY_ENV: dict[str, Optional[str]] = {
    "gemini": "GOOGLE_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "ollama": None,
}

_CREDENTIALS_HEADER = "# gauge credentials, keep out of version control"


def _credentials_path() -> Path:
    return Path.home() / ".config" / "gauge" / "credentials"


def _read_credentials() -> dict[str, str]:
    path = _credentials_path()
    if not path.is_file():
        return {}
    entries = (line.strip() for line in path.read_text().splitlines())
    pairs = (
        line.partition("=")
        for line in entries
        if line and not line.startswith("#") and "=" in line
    )
    return {name.strip(): value.strip() for name, _, value in pairs}


def _write_credentials(creds: dict[str, str]) -> None:
    path = _credentials_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    body = [_CREDENTIALS_HEADER] + [f"{name}={creds[name]}" for name in sorted(creds)]
    path.write_text("\n".join(body) + "\n")
    try:
        path.chmod(stat.S_IRUSR | stat.S_IWUSR)
    except OSError as e:
        logger.warning("Could not restrict permissions on %s: %s", path, e)


def _env_var_for(provider: str) -> str:
    """Environment variable holding ``provider``'s key.

    Raises:
        ValueError: If the provider is unknown or keyless.
    """
    env_var = PROVIDER_KEY_ENV.get(provider)
    if env_var is None:
        raise ValueError(f"Provider '{provider}' does not use an API key")
    return env_var


def _lookup(provider: str) -> tuple[str, Optional[str]]:
    """Find a key and report where it came from.

    The source is one of ``env``, ``keyring``, ``file``, ``not set`` or
    ``no key needed``.
    """
    env_var = PROVIDER_KEY_ENV.get(provider)
    if env_var is None:
        return "no key needed", None

    value = os.environ.get(env_var)
    if value:
        return "env", value
    value = _get_keyring(provider)
    if value:
        return "keyring", value
    value = _read_credentials().get(env_var)
    if value:
        return "file", value
    return "not set", None


def get_key(provider: str) -> Optional[str]:
    """The API key for ``provider``, or None when there is none to use."""
    return _lookup(provider)[1]


def store_key(provider: str, api_key: str) -> None:
    """Save a key, in the keyring if possible, else the credentials file.

    Raises:
        ValueError: For providers that take no key.
    """
    env_var = _env_var_for(provider)
    if _store_keyring(provider, api_key):
        logger.info("Stored %s key in system keyring", provider)
        return
    creds = _read_credentials()
    creds[env_var] = api_key
    _write_credentials(creds)
    logger.info("Stored %s key in %s", provider, _credentials_path())


def remove_key(provider: str) -> bool:
    """Delete a stored key from the keyring and the credentials file.

    Environment variables are left alone. Returns whether anything was
    removed.
    """
    env_var = _env_var_for(provider)
    removed = _remove_keyring(provider)
    creds = _read_credentials()
    if creds.pop(env_var, None) is not None:
        _write_credentials(creds)
        removed = True
    return removed


def list_stored_providers() -> dict[str, str]:
    """Map every known provider to the source of its key."""
    return {provider: _lookup(provider)[0] for provider in PROVIDER_KEY_ENV}


# Keyring backends may be missing or locked; any failure means "no keyring".

def _store_keyring(provider: str, api_key: str) -> bool:
    try:
        keyring.set_password(KEYRING_SERVICE, provider, api_key)
    except Exception as e:
        logger.debug("Keyring unavailable for %s: %s", provider, e)
        return False
    return True


def _get_keyring(provider: str) -> Optional[str]:
    try:
        return keyring.get_password(KEYRING_SERVICE, provider)
    except Exception as e:
        logger.debug("Keyring unavailable for %s: %s", provider, e)
        return None


def _remove_keyring(provider: str) -> bool:
    try:
        keyring.delete_password(KEYRING_SERVICE, provider)
    except Exception as e:
        logger.debug("No keyring entry removed for %s: %s", provider, e)
        return False
    return True
