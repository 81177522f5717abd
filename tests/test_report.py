"""Tests for report rendering and export."""
import json
from pathlib import Path

import pytest
import yaml

from gauge.analyzers.models import FileAnalysis, ProjectAnalysis, ProjectInfo
from gauge.report import (
    HIGH,
    LOW,
    MEDIUM,
    export_report,
    group_by_quality,
    quality_bucket,
    render_report,
    render_text,
    to_dict,
)


def _info():
    info = ProjectInfo.for_root(Path("/work/demo"))
    for path, language, rating in (
        ("src/nine.py", "Python", 9),
        ("src/five.py", "Python", 5),
        ("two.js", "JavaScript", 2),
        ("eight.py", "Python", 8),
        ("four.py", "Python", 4),
    ):
        info.record_file(path, language)
        info.ai_ratings[path] = FileAnalysis(rating, "O(n)", f"rated {rating}", "")
    info.total_lines = 120
    info.directory_count = 1
    info.elapsed_time = 1.234
    return info


def _analysis():
    return ProjectAnalysis(
        overall_rating=6,
        complexity_assessment="Moderate",
        project_strengths="Clear layout",
        project_weaknesses="Sparse tests",
        recommendations="Add tests",
    )


class TestBuckets:
    @pytest.mark.parametrize(
        "rating, bucket",
        [(10, HIGH), (9, HIGH), (8, HIGH), (7, MEDIUM), (5, MEDIUM), (4, MEDIUM), (3, LOW), (2, LOW), (0, LOW)],
    )
    def test_quality_bucket(self, rating, bucket):
        assert quality_bucket(rating) == bucket

    def test_group_by_quality_keeps_order(self):
        groups = group_by_quality(_info().ai_ratings)
        assert list(groups) == [HIGH, MEDIUM, LOW]
        assert [f.name for f in groups[HIGH]] == ["src/nine.py", "eight.py"]
        assert [f.name for f in groups[MEDIUM]] == ["src/five.py", "four.py"]
        assert [f.name for f in groups[LOW]] == ["two.js"]

    def test_empty_buckets_present(self):
        assert group_by_quality({}) == {HIGH: [], MEDIUM: [], LOW: []}


class TestRenderReport:
    def test_sections_in_order(self):
        text = render_text(_info(), _analysis())
        positions = [
            text.index(heading)
            for heading in (
                "PROJECT ANALYSIS REPORT",
                "PROJECT OVERVIEW",
                "OVERALL PROJECT RATING",
                "STATISTICS",
                "CODE QUALITY ANALYSIS",
                "Analysis Complete!",
            )
        ]
        assert positions == sorted(positions)

    def test_overview_and_rating(self):
        lines = []
        render_report(_info(), _analysis(), lines.append)
        assert "Project Name: demo" in lines
        assert f"Location: {Path('/work/demo')}" in lines
        assert "Analysis Duration: 1.23 seconds" in lines
        assert "Rating: 6/10" in lines
        assert "Complexity: Moderate" in lines
        assert "Sparse tests" in lines

    def test_statistics(self):
        lines = []
        render_report(_info(), _analysis(), lines.append)
        assert "Total Files: 5" in lines
        assert "Total Lines of Code: 120" in lines
        assert "  • Python: 4 files" in lines
        assert "  • JavaScript: 1 files" in lines

    def test_files_listed_by_basename(self):
        lines = []
        render_report(_info(), _analysis(), lines.append)
        index = lines.index("  • nine.py")
        assert lines[index + 1] == "    Rating: 9/10"
        assert lines[index + 2] == "    Time Complexity: O(n)"
        assert "  • src/nine.py" not in lines

    def test_plain_has_no_emoji(self):
        text = render_text(_info(), _analysis(), plain=True)
        assert text.isascii()
        assert "  * Python: 4 files" in text
        assert "=" * 23 in text

    def test_fancy_uses_glyphs(self):
        text = render_text(_info(), _analysis())
        assert "📊 PROJECT ANALYSIS REPORT" in text
        assert "═" * 23 in text

    def test_failure_analysis_still_renders(self):
        text = render_text(_info(), ProjectAnalysis.failure("No response from AI provider."))
        assert "Rating: 0/10" in text
        assert "Complexity: N/A" in text
        assert "No response from AI provider." in text


class TestToDict:
    def test_structure(self):
        data = to_dict(_info(), _analysis())
        assert data["project"]["file_count"] == 5
        assert data["project"]["elapsed_time"] == 1.23
        assert data["project"]["files"][0] == {
            "path": "src/nine.py",
            "rating": 9,
            "complexity": "O(n)",
            "explanation": "rated 9",
            "suggestions": "",
        }
        assert data["analysis"]["overall_rating"] == 6
        assert data["quality"] == {
            "high": ["src/nine.py", "eight.py"],
            "medium": ["src/five.py", "four.py"],
            "low": ["two.js"],
        }


class TestExport:
    def test_json(self, tmp_path):
        path = export_report(_info(), _analysis(), tmp_path / "out" / "report.json")
        data = json.loads(path.read_text())
        assert data["analysis"]["recommendations"] == "Add tests"

    def test_yaml(self, tmp_path):
        path = export_report(_info(), _analysis(), tmp_path / "report.yml")
        data = yaml.safe_load(path.read_text())
        assert data["quality"]["low"] == ["two.js"]

    def test_text(self, tmp_path):
        path = export_report(_info(), _analysis(), tmp_path / "report.txt")
        text = path.read_text()
        assert text.startswith("PROJECT ANALYSIS REPORT\n")
        assert text.isascii()
