"""Per-file quality review through an AI provider.

One request per file, no retries. Every failure is turned into a zero-rated
FileAnalysis so the walk and the final report always complete.
"""
from __future__ import annotations

import logging
from typing import Any

from gauge.errors import ResponseParseError
from gauge.providers.base import AIProvider, UnavailableProvider

from .models import NOT_AVAILABLE, FileAnalysis
from .response_parser import parse_json_object

logger = logging.getLogger(__name__)

REVIEW_SYSTEM_PROMPT = """\
You are a code reviewer and complexity analyst. Analyze the following code and provide:
1. A rating on a scale of 1 to 10, where 1 is very poor and 10 is excellent
2. The time complexity of the code using Big O notation
3. A brief explanation of the rating
4. Specific, actionable suggestions for improvement"""

REVIEW_USER_TEMPLATE = """\
Code:
```
{code}
```

Respond with a JSON object in this exact format:
{{
  "rating": <number>,
  "complexity": "<Big O notation>",
  "explanation": "<brief explanation>",
  "suggestions": "<specific, actionable suggestions>"
}}"""

DEFAULT_COMPLEXITY = "O(1)"
RAW_PREVIEW_CHARS = 100


def coerce_rating(value: Any) -> int:
    """Turn a model-supplied rating into an int in 0..10 (0 when unusable)."""
    if isinstance(value, bool):
        return 0
    try:
        rating = int(round(float(value)))
    except (TypeError, ValueError):
        return 0
    return max(0, min(10, rating))


def coerce_text(value: Any, default: str = "") -> str:
    """Normalize a text field; lists (a common model habit) become lines."""
    if value is None or value == "":
        return default
    if isinstance(value, (list, tuple)):
        return "\n".join(str(item) for item in value)
    return str(value)


def build_review_prompt(file_text: str) -> str:
    return REVIEW_USER_TEMPLATE.format(code=file_text)


def parse_file_analysis(raw: str) -> FileAnalysis:
    """Parse a review response, defaulting any missing field.

    Raises:
        ResponseParseError: If the response holds no JSON object.
    """
    data = parse_json_object(raw)
    return FileAnalysis(
        rating=coerce_rating(data.get("rating") or 0),
        complexity=coerce_text(data.get("complexity"), DEFAULT_COMPLEXITY),
        explanation=coerce_text(data.get("explanation")),
        suggestions=coerce_text(data.get("suggestions")),
    )


class ContentAnalyzer:
    """Rates a single file's text with the configured AI provider."""

    def __init__(self, provider: AIProvider, max_tokens: int = 1024):
        self.provider = provider
        self.max_tokens = max_tokens

    def analyze(self, file_text: str) -> FileAnalysis:
        if isinstance(self.provider, UnavailableProvider):
            return FileAnalysis.failure(
                f"AI provider not initialized: {self.provider.reason}"
            )

        try:
            raw = self.provider.chat(
                system=REVIEW_SYSTEM_PROMPT,
                user=build_review_prompt(file_text),
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.warning("AI file review failed: %s", e)
            return FileAnalysis.failure(f"Error calling AI provider: {e}")

        if not raw or not raw.strip():
            return FileAnalysis.failure("No response from AI provider.")

        try:
            return parse_file_analysis(raw)
        except ResponseParseError as e:
            logger.warning("Could not parse AI file review: %s", e)
            return FileAnalysis(
                rating=0,
                complexity=NOT_AVAILABLE,
                explanation=f"Error parsing response: {raw[:RAW_PREVIEW_CHARS]}...",
                suggestions="",
            )
