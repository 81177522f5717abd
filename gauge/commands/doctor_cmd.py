"""Diagnostic command: check environment setup and provider health."""
from __future__ import annotations

import logging
import sys

import typer
from rich.table import Table

from gauge import ui

app = typer.Typer(no_args_is_help=False)
logger = logging.getLogger("gauge.doctor")

# (import name, description, required)
DEPENDENCIES = [
    ("pathspec", "Ignore file matching", True),
    ("keyring", "Secure key storage", False),
    ("google.genai", "Gemini SDK", False),
    ("anthropic", "Anthropic SDK", False),
    ("httpx", "Ollama client", False),
    ("yaml", "YAML export", False),
]


def _module_installed(module_name: str) -> bool:
    try:
        __import__(module_name)
    except ImportError:
        return False
    return True


def collect_checks(verbose: bool = False) -> list[tuple[str, bool, bool, str]]:
    """Run every check and return (name, passed, required, detail) rows."""
    checks: list[tuple[str, bool, bool, str]] = []

    py_version = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    py_ok = sys.version_info >= (3, 10)
    checks.append(("Python version", py_ok, True, f"{py_version} {'(OK)' if py_ok else '(requires 3.10+)'}"))

    from gauge.core.config_service import get_config_service
    from gauge.core.secrets import list_stored_providers

    config_svc = get_config_service()
    active = config_svc.get_provider_name()

    for provider_name, status in list_stored_providers().items():
        has_key = status in ("env", "keyring", "file", "no key needed")
        detail = f"API key: {status} | model: {config_svc.get_provider_model(provider_name)}"
        if verbose and has_key:
            from gauge.providers import get_provider
            try:
                provider = get_provider(provider_name)
                reachable = provider.is_available()
            except Exception as e:
                logger.debug("Provider %s failed to initialize", provider_name, exc_info=True)
                detail += f" | init error: {e}"
                has_key = False
            else:
                if provider_name == "ollama":
                    state = "reachable" if reachable else "not reachable"
                    detail += f" | server: {state} ({provider.endpoint})"
                    has_key = reachable
        label = f"Provider: {provider_name}" + (" (active)" if provider_name == active else "")
        # Only the active provider has to work
        checks.append((label, has_key, provider_name == active, detail))

    for module_name, description, required in DEPENDENCIES:
        dep_ok = _module_installed(module_name)
        checks.append((
            f"Dependency: {description}",
            dep_ok,
            required,
            f"{module_name} {'installed' if dep_ok else 'not installed'}",
        ))

    for config_name, config_detail in config_svc.config_paths().items():
        checks.append((f"Config: {config_name}", "exists" in config_detail, False, config_detail))

    return checks


@app.callback(invoke_without_command=True)
def doctor(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Initialize providers and probe servers"),
):
    """Run diagnostic checks on the gauge environment."""
    checks = collect_checks(verbose)

    table = Table(title="gauge doctor", show_header=True, border_style="cyan")
    table.add_column("Check", min_width=25)
    table.add_column("Status", justify="center", width=6)
    table.add_column("Detail")

    all_ok = True
    for name, passed, required, detail in checks:
        table.add_row(name, ui.status_icon("complete" if passed else "error"), detail)
        if required and not passed:
            all_ok = False

    ui.console.print(table)

    if all_ok:
        ui.console.print("\n[green]All checks passed.[/green]")
    else:
        ui.console.print("\n[yellow]Some checks failed. See details above.[/yellow]")
        raise typer.Exit(1)
