"""Service layer for gauge: configuration and secrets.

Services never import from gauge.ui, gauge.cli, or typer.
"""
