"""Whole-project verdict built from the per-file reviews."""
from __future__ import annotations

import logging

from gauge.errors import ResponseParseError
from gauge.providers.base import AIProvider, UnavailableProvider

from .content_analyzer import RAW_PREVIEW_CHARS, coerce_rating, coerce_text
from .models import ProjectAnalysis, ProjectInfo
from .response_parser import parse_json_object

logger = logging.getLogger(__name__)

PROJECT_SYSTEM_PROMPT = (
    "You are a project quality analyst. "
    "Analyze this entire project and provide an overall assessment."
)

PROJECT_USER_TEMPLATE = """\
Project Statistics:
- Total Files: {file_count}
- Total Lines of Code: {total_lines}
- Language Distribution: {languages}

Individual File Analyses:
{files_summary}

Provide a comprehensive project analysis in this JSON format:
{{
    "overall_rating": <number 1-10>,
    "complexity_assessment": "<overall project complexity assessment>",
    "project_strengths": "<list key project strengths>",
    "project_weaknesses": "<list main areas for improvement>",
    "recommendations": "<specific, actionable recommendations for the entire project>"
}}"""

MISSING_ANALYSIS = "No analysis available"

PROJECT_FIELDS = (
    "overall_rating",
    "complexity_assessment",
    "project_strengths",
    "project_weaknesses",
    "recommendations",
)


def build_project_prompt(info: ProjectInfo) -> str:
    languages = ", ".join(
        f"{lang}: {count} files" for lang, count in info.languages.items()
    )
    summaries = []
    for path in info.files:
        analysis = info.ai_ratings.get(path)
        explanation = analysis.explanation if analysis and analysis.explanation else MISSING_ANALYSIS
        summaries.append(f"{path}: {explanation}")
    return PROJECT_USER_TEMPLATE.format(
        file_count=info.file_count,
        total_lines=info.total_lines,
        languages=languages,
        files_summary="\n\n".join(summaries),
    )


def parse_project_analysis(raw: str) -> ProjectAnalysis:
    """Parse an aggregate response; all five fields must be present.

    Raises:
        ResponseParseError: If the JSON is unusable or a field is missing.
    """
    data = parse_json_object(raw)
    missing = [name for name in PROJECT_FIELDS if name not in data]
    if missing:
        raise ResponseParseError(
            f"Project analysis is missing fields: {', '.join(missing)}", raw=raw,
        )
    return ProjectAnalysis(
        overall_rating=coerce_rating(data["overall_rating"]),
        complexity_assessment=coerce_text(data["complexity_assessment"]),
        project_strengths=coerce_text(data["project_strengths"]),
        project_weaknesses=coerce_text(data["project_weaknesses"]),
        recommendations=coerce_text(data["recommendations"]),
    )


class ProjectAggregator:
    """Asks the provider for one verdict over a completed ProjectInfo."""

    def __init__(self, provider: AIProvider, max_tokens: int = 2048):
        self.provider = provider
        self.max_tokens = max_tokens

    def analyze(self, info: ProjectInfo) -> ProjectAnalysis:
        if isinstance(self.provider, UnavailableProvider):
            return ProjectAnalysis.failure(
                f"AI provider not initialized: {self.provider.reason}"
            )

        try:
            raw = self.provider.chat(
                system=PROJECT_SYSTEM_PROMPT,
                user=build_project_prompt(info),
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.warning("AI project analysis failed: %s", e)
            return ProjectAnalysis.failure(f"Error calling AI provider: {e}")

        if not raw or not raw.strip():
            return ProjectAnalysis.failure("No response from AI provider.")

        try:
            return parse_project_analysis(raw)
        except ResponseParseError as e:
            logger.warning("Could not parse AI project analysis: %s", e)
            return ProjectAnalysis.failure(
                f"Error parsing response: {raw[:RAW_PREVIEW_CHARS]}..."
            )
