"""Shell completion functions for the gauge CLI."""
from __future__ import annotations


def complete_provider_name(incomplete: str) -> list[str]:
    """Complete provider names, including ones registered by plugins."""
    from gauge.providers import get_provider_names
    return [p for p in get_provider_names() if p.startswith(incomplete)]


def complete_export_path(incomplete: str) -> list[str]:
    """Suggest report file names for each export format."""
    names = ["gauge-report.txt", "gauge-report.json", "gauge-report.yaml"]
    return [n for n in names if n.startswith(incomplete)]
