"""Project tree traversal.

Walks a project root depth-first without recursion, skipping ignored paths,
and feeds every file to the content analyzer one at a time.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator, Optional, Protocol

from .languages import detect_language
from .models import FileAnalysis, ProjectInfo

logger = logging.getLogger(__name__)

# (relative path, 1-based file index)
ProgressCallback = Callable[[str, int], None]


class FileReviewer(Protocol):
    def analyze(self, file_text: str) -> FileAnalysis: ...


def count_lines(text: str) -> int:
    """Number of newline-delimited segments; "" is one line, "a\\n" is two."""
    return text.count("\n") + 1


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


class TreeWalker:
    """Fills a ProjectInfo by visiting every non-ignored entry under its root.

    Entries are visited in directory-listing order and a subdirectory is
    finished before its next sibling, so ``files`` comes out in the same
    order a recursive pre-order walk would produce.
    """

    def __init__(
        self,
        reviewer: FileReviewer,
        is_ignored: Callable[[str], bool],
        on_file: Optional[ProgressCallback] = None,
    ):
        self.reviewer = reviewer
        self.is_ignored = is_ignored
        self.on_file = on_file

    def walk(self, info: ProjectInfo) -> ProjectInfo:
        root = info.root_path
        stack: list[Iterator[Path]] = [self._list_dir(root)]

        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            relative_path = entry.relative_to(root).as_posix()
            try:
                is_dir = entry.is_dir()
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                # Unknown kind; count it as a file that failed so nothing is dropped
                logger.warning("Cannot stat %s: %s", relative_path, e)
                if not self.is_ignored(relative_path):
                    info.record_file(relative_path, detect_language(entry))
                    info.ai_ratings[relative_path] = FileAnalysis.processing_error()
                continue

            if is_dir:
                if self.is_ignored(relative_path + "/"):
                    continue
                info.directory_count += 1
                if entry.is_symlink():
                    logger.debug("Not following symlinked directory %s", relative_path)
                    continue
                stack.append(self._list_dir(entry))
            elif is_file:
                if self.is_ignored(relative_path):
                    continue
                self._visit_file(entry, relative_path, info)

        return info

    def _list_dir(self, directory: Path) -> Iterator[Path]:
        try:
            return iter(list(directory.iterdir()))
        except OSError as e:
            logger.warning("Cannot list %s: %s", directory, e)
            return iter(())

    def _visit_file(self, path: Path, relative_path: str, info: ProjectInfo) -> None:
        info.record_file(relative_path, detect_language(path))
        try:
            if self.on_file:
                self.on_file(relative_path, info.file_count)
            text = read_text(path)
            info.total_lines += count_lines(text)
            info.ai_ratings[relative_path] = self.reviewer.analyze(text)
        except Exception as e:
            logger.warning("Error processing %s: %s", relative_path, e)
            info.ai_ratings[relative_path] = FileAnalysis.processing_error()
