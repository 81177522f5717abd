"""Tests for extension based language detection."""
from pathlib import Path

import pytest

from gauge.analyzers.languages import LANGUAGE_BY_EXTENSION, UNKNOWN_LANGUAGE, detect_language


@pytest.mark.parametrize(
    "path, language",
    [
        ("main.py", "Python"),
        ("src/lib.rs", "Rust"),
        ("web/App.tsx", "TypeScriptReact"),
        ("web/App.jsx", "JavaScriptReact"),
        ("run.sh", "Shell Script"),
        ("config.yml", "YAML"),
        ("config.yaml", "YAML"),
        ("native/x.cpp", "C++"),
    ],
)
def test_known_extensions(path, language):
    assert detect_language(path) == language


def test_extension_is_case_insensitive():
    assert detect_language("LEGACY.PY") == "Python"


@pytest.mark.parametrize("path", ["data.xyz", "Makefile", ".bashrc", "archive.tar.gz"])
def test_unknown(path):
    assert detect_language(path) == UNKNOWN_LANGUAGE


def test_accepts_path_objects():
    assert detect_language(Path("pkg") / "mod.go") == "Go"


def test_table_size():
    assert len(LANGUAGE_BY_EXTENSION) == 22
