"""Gitignore-style path filtering for project traversal."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import pathspec

logger = logging.getLogger(__name__)

# Always excluded, whatever the ignore file says
DEFAULT_EXCLUDES: tuple[str, ...] = (".venv/", ".env/")

DEFAULT_IGNORE_FILE = ".gitignore"


class IgnoreFilter:
    """Predicate over root-relative paths.

    Directory paths must end with ``/`` so that directory-only patterns
    (``build/``) match them; the walker takes care of that.
    """

    def __init__(self, patterns: Iterable[str]):
        self.patterns: tuple[str, ...] = tuple(patterns)
        self._spec = pathspec.GitIgnoreSpec.from_lines(self.patterns)

    def __call__(self, relative_path: str) -> bool:
        return self.is_ignored(relative_path)

    def is_ignored(self, relative_path: str) -> bool:
        path = relative_path.replace("\\", "/")
        if not path or path in (".", "./"):
            return False
        return self._spec.match_file(path)


def read_ignore_patterns(path: Path) -> list[str]:
    """Read pattern lines from an ignore file; unreadable or missing means none."""
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("No ignore patterns from %s: %s", path, e)
        return []


def build_ignore_filter(
    root: Path,
    ignore_file: str = DEFAULT_IGNORE_FILE,
    extra_patterns: Iterable[str] = (),
) -> IgnoreFilter:
    """Build the ignore predicate for a project root.

    Args:
        root: Project root directory.
        ignore_file: Name of the gitignore-syntax file at the root.
        extra_patterns: Additional patterns from configuration.

    Returns:
        An IgnoreFilter combining the file's patterns, the configured extras,
        the built-in default exclusions and the ignore file itself.
    """
    patterns = read_ignore_patterns(root / ignore_file)
    if patterns:
        logger.debug("Loaded %d ignore lines from %s", len(patterns), root / ignore_file)
    patterns.extend(extra_patterns)
    patterns.extend(DEFAULT_EXCLUDES)
    # Never report the pattern file itself
    patterns.append("/" + ignore_file.lstrip("/"))
    return IgnoreFilter(patterns)
