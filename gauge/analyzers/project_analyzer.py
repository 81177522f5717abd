"""Project analyzer orchestrator.

Builds the ignore filter, walks the tree reviewing each file, times the
walk, then asks for the whole-project verdict.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from gauge.core.config_service import ConfigService, get_config_service
from gauge.errors import WorkspaceNotFoundError
from gauge.providers.base import AIProvider

from .content_analyzer import ContentAnalyzer
from .ignore_filter import build_ignore_filter
from .models import ProjectAnalysis, ProjectInfo
from .project_aggregator import ProjectAggregator
from .walker import ProgressCallback, TreeWalker

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Everything one run produces."""
    info: ProjectInfo
    analysis: ProjectAnalysis


class ProjectAnalyzer:
    """Runs the sequential walk-review-aggregate pipeline for one provider."""

    def __init__(
        self,
        provider: AIProvider,
        config: Optional[ConfigService] = None,
        is_ignored: Optional[Callable[[str], bool]] = None,
    ):
        self.provider = provider
        self.config = config or get_config_service()
        self._is_ignored = is_ignored
        self.settings = self.config.analysis_settings()
        self.content_analyzer = ContentAnalyzer(provider, max_tokens=self.settings.max_tokens)
        self.aggregator = ProjectAggregator(provider, max_tokens=self.settings.max_tokens * 2)

    def analyze(
        self,
        project_path: Path,
        on_file: Optional[ProgressCallback] = None,
    ) -> ProjectInfo:
        """Walk a project directory and review every non-ignored file.

        Args:
            project_path: Root directory of the project to analyze.
            on_file: Optional progress callback, called before each file review.

        Returns:
            The filled ProjectInfo, with ``elapsed_time`` set to the wall-clock
            duration of the walk.

        Raises:
            WorkspaceNotFoundError: If project_path is not a directory.
        """
        project_path = Path(project_path).resolve()
        if not project_path.is_dir():
            raise WorkspaceNotFoundError(str(project_path))

        logger.info("Analyzing project: %s", project_path)

        is_ignored = self._is_ignored or build_ignore_filter(
            project_path,
            ignore_file=self.settings.ignore_file,
            extra_patterns=list(self.settings.exclude),
        )
        info = ProjectInfo.for_root(project_path)
        walker = TreeWalker(self.content_analyzer, is_ignored, on_file=on_file)

        started = time.perf_counter()
        walker.walk(info)
        info.elapsed_time = time.perf_counter() - started

        logger.info(
            "Reviewed %d files in %d directories (%.2fs)",
            info.file_count, info.directory_count, info.elapsed_time,
        )
        return info

    def assess(self, info: ProjectInfo) -> ProjectAnalysis:
        """Produce the whole-project verdict for a completed walk."""
        return self.aggregator.analyze(info)

    def run(
        self,
        project_path: Path,
        on_file: Optional[ProgressCallback] = None,
    ) -> AnalysisResult:
        info = self.analyze(project_path, on_file=on_file)
        return AnalysisResult(info=info, analysis=self.assess(info))
