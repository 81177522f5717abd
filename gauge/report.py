"""Report rendering and export.

The report is produced as an ordered sequence of plain text lines handed to
an ``emit`` callable, so the same layout can go to the terminal, a file, or
a test's list.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Callable, Mapping

import yaml

from gauge.analyzers.models import FileAnalysis, ProjectAnalysis, ProjectInfo

logger = logging.getLogger("gauge.report")

HIGH = "high"
MEDIUM = "medium"
LOW = "low"

HIGH_THRESHOLD = 8
MEDIUM_THRESHOLD = 4

Emit = Callable[[str], None]


@dataclass(frozen=True)
class RatedFile:
    name: str
    rating: int
    complexity: str

    @property
    def basename(self) -> str:
        return PurePosixPath(self.name).name


def quality_bucket(rating: int) -> str:
    """high for 8 and up, medium for 4..7, low below 4."""
    if rating >= HIGH_THRESHOLD:
        return HIGH
    if rating >= MEDIUM_THRESHOLD:
        return MEDIUM
    return LOW


def group_by_quality(ai_ratings: Mapping[str, FileAnalysis]) -> dict[str, list[RatedFile]]:
    """Partition rated files into quality buckets, keeping mapping order."""
    groups: dict[str, list[RatedFile]] = {HIGH: [], MEDIUM: [], LOW: []}
    for name, analysis in ai_ratings.items():
        rated = RatedFile(
            name=name,
            rating=analysis.rating or 0,
            complexity=analysis.complexity or "O(1)",
        )
        groups[quality_bucket(rated.rating)].append(rated)
    return groups


# Section glyphs: (fancy, plain)
_GLYPHS = {
    "title": ("📊 PROJECT ANALYSIS REPORT", "PROJECT ANALYSIS REPORT"),
    "overview": ("📁 PROJECT OVERVIEW", "PROJECT OVERVIEW"),
    "overall": ("🌟 OVERALL PROJECT RATING", "OVERALL PROJECT RATING"),
    "strengths": ("💪 Project Strengths:", "Project Strengths:"),
    "weaknesses": ("⚠️ Areas for Improvement:", "Areas for Improvement:"),
    "recommendations": ("📝 Recommendations:", "Recommendations:"),
    "statistics": ("📈 STATISTICS", "STATISTICS"),
    "quality": ("🎯 CODE QUALITY ANALYSIS", "CODE QUALITY ANALYSIS"),
    HIGH: ("✨ High Quality Code (8-10):", "High Quality Code (8-10):"),
    MEDIUM: ("📝 Medium Quality Code (4-7):", "Medium Quality Code (4-7):"),
    LOW: ("⚠ Needs Improvement (1-3):", "Needs Improvement (1-3):"),
    "footer": ("Analysis Complete! 🎉", "Analysis Complete!"),
    "bullet": ("•", "*"),
}


def render_report(
    info: ProjectInfo,
    analysis: ProjectAnalysis,
    emit: Emit,
    plain: bool = False,
) -> None:
    """Emit the full text report line by line."""

    def glyph(key: str) -> str:
        return _GLYPHS[key][1 if plain else 0]

    def heading(key: str, underline: str = "─") -> None:
        text = glyph(key)
        emit(text)
        emit(("-" if plain else underline) * len(text))

    rule = ("=" if plain else "═") * 23
    bullet = glyph("bullet")

    emit(glyph("title"))
    emit(rule)
    emit("")

    heading("overview")
    emit(f"Project Name: {info.project_name}")
    emit(f"Location: {info.root_path}")
    emit(f"Analysis Duration: {info.elapsed_time:.2f} seconds")
    emit("")

    heading("overall")
    emit(f"Rating: {analysis.overall_rating}/10")
    emit(f"Complexity: {analysis.complexity_assessment}")
    for key, text in (
        ("strengths", analysis.project_strengths),
        ("weaknesses", analysis.project_weaknesses),
        ("recommendations", analysis.recommendations),
    ):
        emit("")
        emit(glyph(key))
        emit(text)
    emit("")

    heading("statistics")
    emit(f"Total Files: {info.file_count}")
    emit(f"Total Lines of Code: {info.total_lines}")
    emit("")
    emit("Language Distribution:")
    for language, count in info.languages.items():
        emit(f"  {bullet} {language}: {count} files")
    emit("")

    heading("quality")
    emit("")
    for bucket, files in group_by_quality(info.ai_ratings).items():
        emit(glyph(bucket))
        for rated in files:
            emit(f"  {bullet} {rated.basename}")
            emit(f"    Rating: {rated.rating}/10")
            emit(f"    Time Complexity: {rated.complexity}")
        emit("")

    emit(rule)
    emit(glyph("footer"))


def render_text(info: ProjectInfo, analysis: ProjectAnalysis, plain: bool = False) -> str:
    lines: list[str] = []
    render_report(info, analysis, lines.append, plain=plain)
    return "\n".join(lines) + "\n"


def to_dict(info: ProjectInfo, analysis: ProjectAnalysis) -> dict:
    """Serializable view of a run, with files grouped by quality bucket."""
    groups = group_by_quality(info.ai_ratings)
    return {
        "project": info.to_dict(),
        "analysis": analysis.to_dict(),
        "quality": {
            bucket: [rated.name for rated in files]
            for bucket, files in groups.items()
        },
    }


def export_report(info: ProjectInfo, analysis: ProjectAnalysis, path: Path) -> Path:
    """Write the report to ``path``; the suffix picks JSON, YAML or text."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    suffix = path.suffix.lower()
    if suffix == ".json":
        path.write_text(json.dumps(to_dict(info, analysis), indent=2), encoding="utf-8")
    elif suffix in (".yaml", ".yml"):
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(to_dict(info, analysis), f, sort_keys=False, allow_unicode=True)
    else:
        path.write_text(render_text(info, analysis, plain=True), encoding="utf-8")
    logger.info("Wrote report to %s", path)
    return path
