"""Tests for per-file AI review."""
import json
from unittest.mock import MagicMock

import pytest

from gauge.analyzers.content_analyzer import (
    REVIEW_SYSTEM_PROMPT,
    ContentAnalyzer,
    build_review_prompt,
    coerce_rating,
    coerce_text,
    parse_file_analysis,
)
from gauge.analyzers.models import FileAnalysis
from gauge.errors import ProviderQuotaError, ResponseParseError
from gauge.providers.base import UnavailableProvider


def _provider(response):
    provider = MagicMock()
    provider.chat.return_value = response
    return provider


class TestCoercion:
    @pytest.mark.parametrize(
        "value, expected",
        [(7, 7), ("8", 8), (8.6, 9), (15, 10), (-3, 0), ("bad", 0), (None, 0), (True, 0)],
    )
    def test_coerce_rating(self, value, expected):
        assert coerce_rating(value) == expected

    def test_coerce_text_joins_lists(self):
        assert coerce_text(["Add tests", "Split module"]) == "Add tests\nSplit module"

    def test_coerce_text_default(self):
        assert coerce_text(None, "O(1)") == "O(1)"
        assert coerce_text("", "O(1)") == "O(1)"


class TestParseFileAnalysis:
    def test_full_response(self):
        raw = json.dumps({
            "rating": 6,
            "complexity": "O(n log n)",
            "explanation": "Sorting dominates.",
            "suggestions": "Cache results.",
        })
        assert parse_file_analysis(raw) == FileAnalysis(6, "O(n log n)", "Sorting dominates.", "Cache results.")

    def test_missing_fields_get_defaults(self):
        result = parse_file_analysis('{"rating": 5}')
        assert result == FileAnalysis(rating=5, complexity="O(1)", explanation="", suggestions="")

    def test_unparseable_raises(self):
        with pytest.raises(ResponseParseError):
            parse_file_analysis("no json")


class TestContentAnalyzer:
    def test_fenced_response(self):
        provider = _provider(
            '```json\n{"rating":7,"complexity":"O(n)","explanation":"Fine","suggestions":"None"}\n```'
        )
        result = ContentAnalyzer(provider).analyze("print(1)\n")
        assert result.rating == 7
        assert result.complexity == "O(n)"
        assert result.explanation == "Fine"

    def test_sends_code_and_token_limit(self):
        provider = _provider('{"rating": 5}')
        ContentAnalyzer(provider, max_tokens=321).analyze("x = 1\n")
        provider.chat.assert_called_once_with(
            system=REVIEW_SYSTEM_PROMPT,
            user=build_review_prompt("x = 1\n"),
            max_tokens=321,
        )
        assert "x = 1" in build_review_prompt("x = 1\n")

    def test_unavailable_provider_makes_no_calls(self):
        provider = UnavailableProvider("gemini", "GOOGLE_API_KEY not set")
        provider.chat = MagicMock()
        result = ContentAnalyzer(provider).analyze("print(1)\n")
        assert result == FileAnalysis(
            rating=0,
            complexity="N/A",
            explanation="AI provider not initialized: GOOGLE_API_KEY not set",
            suggestions="",
        )
        assert provider.chat.call_count == 0

    @pytest.mark.parametrize("response", ["", "   \n", None])
    def test_empty_response(self, response):
        result = ContentAnalyzer(_provider(response)).analyze("x")
        assert result == FileAnalysis.failure("No response from AI provider.")

    def test_malformed_json(self):
        raw = "The rating is seven out of ten. " * 10
        result = ContentAnalyzer(_provider(raw)).analyze("x")
        assert result.rating == 0
        assert result.complexity == "N/A"
        assert result.explanation == f"Error parsing response: {raw[:100]}..."

    def test_provider_error(self):
        provider = MagicMock()
        provider.chat.side_effect = ProviderQuotaError("Gemini quota exceeded.", provider="gemini")
        result = ContentAnalyzer(provider).analyze("x")
        assert result.rating == 0
        assert result.explanation == "Error calling AI provider: Gemini quota exceeded."

    def test_unexpected_error(self):
        provider = MagicMock()
        provider.chat.side_effect = RuntimeError("socket closed")
        result = ContentAnalyzer(provider).analyze("x")
        assert result.explanation == "Error calling AI provider: socket closed"

    def test_out_of_range_rating_is_clamped(self):
        result = ContentAnalyzer(_provider('{"rating": 42}')).analyze("x")
        assert result.rating == 10
