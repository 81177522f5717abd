"""Shared fixtures for gauge tests."""
import json
import logging
from unittest.mock import MagicMock

import pytest

# Env vars that would leak a developer's setup into the tests
GAUGE_ENV_VARS = (
    "GAUGE_PROVIDER",
    "AI_PROVIDER",
    "GAUGE_PLAIN",
    "GAUGE_IGNORE_FILE",
    "GAUGE_DEBUG",
    "GEMINI_MODEL",
    "ANTHROPIC_MODEL",
    "OLLAMA_MODEL",
    "OLLAMA_ENDPOINT",
    "GOOGLE_API_KEY",
    "ANTHROPIC_API_KEY",
)

FILE_REVIEW = {
    "rating": 8,
    "complexity": "O(n)",
    "explanation": "Clear and small.",
    "suggestions": "Add docstrings.",
}

PROJECT_REVIEW = {
    "overall_rating": 7,
    "complexity_assessment": "Low",
    "project_strengths": "Readable modules",
    "project_weaknesses": "Few tests",
    "recommendations": "Add a test suite",
}


@pytest.fixture(autouse=True)
def gauge_home(tmp_path, monkeypatch):
    """Point every config and credential path into a temporary directory.

    Also runs each test from an empty working directory, clears gauge env
    vars (including ones the CLI callback sets during a test) and disables
    the system keyring.
    """
    home = tmp_path / "gauge-home"
    home.mkdir()
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    for var in GAUGE_ENV_VARS:
        # setenv first so teardown removes values set while the test ran
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)

    import gauge.core.config_service as config_service
    import gauge.core.secrets as secrets
    monkeypatch.setattr(config_service, "_global_config_dir", lambda: home)
    monkeypatch.setattr(config_service, "_global_config_path", lambda: home / "config.toml")
    monkeypatch.setattr(secrets, "_credentials_path", lambda: home / "credentials")
    monkeypatch.setattr(secrets, "_get_keyring", lambda provider: None)
    monkeypatch.setattr(secrets, "_store_keyring", lambda provider, api_key: False)
    monkeypatch.setattr(secrets, "_remove_keyring", lambda provider: False)

    config_service.reset_config_service()

    from gauge import ui
    ui.set_plain_mode(False)
    ui.set_json_mode(False)

    yield home

    config_service.reset_config_service()
    ui.set_plain_mode(False)
    ui.set_json_mode(False)
    gauge_logger = logging.getLogger("gauge")
    gauge_logger.handlers.clear()
    gauge_logger.propagate = True
    gauge_logger.setLevel(logging.NOTSET)


@pytest.fixture
def mock_provider():
    """Create a mock AI provider that answers file and project prompts."""
    from gauge.analyzers.project_aggregator import PROJECT_SYSTEM_PROMPT

    def chat(system, user, max_tokens=4000):
        if system == PROJECT_SYSTEM_PROMPT:
            return json.dumps(PROJECT_REVIEW)
        return "```json\n" + json.dumps(FILE_REVIEW) + "\n```"

    provider = MagicMock()
    provider.name = "mock"
    provider.model = "mock-model-1"
    provider.is_available.return_value = True
    provider.chat.side_effect = chat
    return provider


@pytest.fixture
def sample_project(tmp_path):
    """A small project tree with an ignore file, an ignored log and a subpackage."""
    root = tmp_path / "sample"
    root.mkdir()
    (root / ".gitignore").write_text("*.log\nbuild/\n")
    (root / "main.py").write_text("import app\n\napp.run()\n")
    (root / "debug.log").write_text("noise\n")
    (root / "app").mkdir()
    (root / "app" / "__init__.py").write_text("")
    (root / "app" / "core.js").write_text("export const x = 1;\n")
    (root / "build").mkdir()
    (root / "build" / "out.py").write_text("print('built')\n")
    (root / ".venv").mkdir()
    (root / ".venv" / "site.py").write_text("x = 1\n")
    return root
