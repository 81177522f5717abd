"""Data models for project analysis results."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class FileAnalysis:
    """AI verdict for a single source file."""
    rating: int = 0
    complexity: str = NOT_AVAILABLE
    explanation: str = ""
    suggestions: str = ""

    @classmethod
    def failure(cls, explanation: str) -> FileAnalysis:
        """Zero-rated placeholder used whenever a file could not be rated."""
        return cls(rating=0, complexity=NOT_AVAILABLE, explanation=explanation, suggestions="")

    @classmethod
    def processing_error(cls) -> FileAnalysis:
        return cls.failure("Error processing file")


@dataclass(frozen=True)
class ProjectAnalysis:
    """AI verdict for the project as a whole."""
    overall_rating: int = 0
    complexity_assessment: str = NOT_AVAILABLE
    project_strengths: str = ""
    project_weaknesses: str = ""
    recommendations: str = ""

    @classmethod
    def failure(cls, message: str) -> ProjectAnalysis:
        """Placeholder carrying ``message`` in the strengths field."""
        return cls(
            overall_rating=0,
            complexity_assessment=NOT_AVAILABLE,
            project_strengths=message,
            project_weaknesses="",
            recommendations="",
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ProjectInfo:
    """Accumulated statistics and per-file verdicts for one analysis run.

    ``files`` keeps traversal order; ``ai_ratings`` holds exactly one
    FileAnalysis for every entry in ``files``.
    """
    root_path: Path
    project_name: str
    file_count: int = 0
    directory_count: int = 0
    total_lines: int = 0
    languages: dict[str, int] = field(default_factory=dict)  # language -> file count
    files: list[str] = field(default_factory=list)
    ai_ratings: dict[str, FileAnalysis] = field(default_factory=dict)
    elapsed_time: float = 0.0  # seconds

    @classmethod
    def for_root(cls, root_path: Path) -> ProjectInfo:
        return cls(root_path=root_path, project_name=root_path.name)

    def record_file(self, relative_path: str, language: str) -> None:
        self.file_count += 1
        self.languages[language] = self.languages.get(language, 0) + 1
        self.files.append(relative_path)

    def to_dict(self) -> dict:
        return {
            "project_name": self.project_name,
            "root_path": str(self.root_path),
            "file_count": self.file_count,
            "directory_count": self.directory_count,
            "total_lines": self.total_lines,
            "languages": dict(self.languages),
            "elapsed_time": round(self.elapsed_time, 2),
            "files": [
                {"path": path, **asdict(self.ai_ratings[path])}
                for path in self.files
                if path in self.ai_ratings
            ],
        }
