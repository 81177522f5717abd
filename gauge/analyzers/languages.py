"""File extension to language classification."""
from __future__ import annotations

from pathlib import PurePath

UNKNOWN_LANGUAGE = "Unknown"

LANGUAGE_BY_EXTENSION: dict[str, str] = {
    ".js": "JavaScript",
    ".ts": "TypeScript",
    ".html": "HTML",
    ".css": "CSS",
    ".py": "Python",
    ".java": "Java",
    ".c": "C",
    ".cpp": "C++",
    ".go": "Go",
    ".rs": "Rust",
    ".php": "PHP",
    ".rb": "Ruby",
    ".swift": "Swift",
    ".kt": "Kotlin",
    ".sh": "Shell Script",
    ".md": "Markdown",
    ".json": "JSON",
    ".xml": "XML",
    ".yaml": "YAML",
    ".yml": "YAML",
    ".tsx": "TypeScriptReact",
    ".jsx": "JavaScriptReact",
}


def detect_language(path: str | PurePath) -> str:
    """Map a file path to a language name by its (case-insensitive) extension."""
    suffix = PurePath(path).suffix.lower()
    return LANGUAGE_BY_EXTENSION.get(suffix, UNKNOWN_LANGUAGE)
