"""Shared UI theme, console, logging and display helpers for gauge."""

import json
import logging
import os

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.theme import Theme

# ── Output Mode State ──
_plain_mode: bool = False
_json_mode: bool = False


def set_plain_mode(enabled: bool = True) -> None:
    """Enable or disable plain text output (no colors, no panels, ASCII only)."""
    global _plain_mode, console
    _plain_mode = enabled
    if enabled:
        console = Console(no_color=True, highlight=False)
    else:
        console = Console(theme=GAUGE_THEME)


def set_json_mode(enabled: bool = True) -> None:
    """Enable or disable JSON output mode."""
    global _json_mode
    _json_mode = enabled


def is_plain() -> bool:
    """Check if plain output mode is active."""
    return _plain_mode


def is_json() -> bool:
    """Check if JSON output mode is active."""
    return _json_mode


def print_json_output(data: dict | list) -> None:
    """Print data as formatted JSON to stdout."""
    print(json.dumps(data, indent=2, default=str))


# ── Theme ──
GAUGE_THEME = Theme({
    "success": "bold green",
    "brand": "bold cyan",
})

console = Console(theme=GAUGE_THEME)

# ── Status Icons ──
ICONS = {
    "complete": "[green]✔[/green]",       # checkmark
    "error": "[red]✘[/red]",              # cross
    "bullet": "[cyan]•[/cyan]",           # bullet
}

# ASCII equivalents for plain mode
PLAIN_ICONS = {
    "complete": "[OK]",
    "error": "[!!]",
    "bullet": "*",
}


def status_icon(status: str) -> str:
    if _plain_mode:
        return PLAIN_ICONS.get(status, PLAIN_ICONS["bullet"])
    return ICONS.get(status, ICONS["bullet"])


def debug_enabled() -> bool:
    """Check if debug output is enabled via GAUGE_DEBUG env var."""
    return os.environ.get("GAUGE_DEBUG", "").lower() in ("1", "true", "yes")


def setup_logging(verbose: bool = False) -> None:
    """Route ``gauge.*`` log records to stderr through Rich."""
    level = logging.DEBUG if verbose or debug_enabled() else logging.WARNING
    logger = logging.getLogger("gauge")
    logger.handlers.clear()
    handler = RichHandler(
        console=Console(stderr=True, no_color=_plain_mode),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def banner(project_name: str, provider_label: str):
    """Display the analysis header."""
    if _json_mode:
        return
    if _plain_mode:
        print(f"gauge - analyzing {project_name} with {provider_label}")
        print()
        return

    console.print(Panel(
        f"[bold]{project_name}[/bold]\n[dim]AI provider: {provider_label}[/dim]",
        title="[brand]gauge[/brand]",
        border_style="cyan",
        padding=(0, 2),
    ))


def success_message(text: str):
    if _json_mode:
        return
    if _plain_mode:
        print(f"OK: {text}")
        return
    console.print(f"[success]{text}[/success]")


def error_panel(title: str, content: str = ""):
    """Display an error panel."""
    if _json_mode:
        print_json_output({"error": title, "detail": content})
        return
    if _plain_mode:
        console.print(f"ERROR: {title}")
        if content:
            console.print(f"  {content}")
        return

    console.print(Panel(
        content,
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
