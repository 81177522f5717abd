"""Tests for shell completion functions."""
from gauge.completions import complete_export_path, complete_provider_name


class TestCompleteProviderName:
    def test_returns_matching(self):
        assert complete_provider_name("gem") == ["gemini"]

    def test_returns_empty_on_no_match(self):
        assert complete_provider_name("zzz") == []

    def test_returns_all_on_empty(self):
        assert {"anthropic", "gemini", "ollama"} <= set(complete_provider_name(""))


class TestCompleteExportPath:
    def test_prefix(self):
        assert complete_export_path("gauge-report.j") == ["gauge-report.json"]

    def test_all_formats(self):
        assert len(complete_export_path("")) == 3
