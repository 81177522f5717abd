"""Turns exceptions raised by gauge commands into messages and exit codes."""

from __future__ import annotations

import functools
import logging
import traceback

import typer

from gauge import ui
from gauge.errors import (
    ConfigError,
    GaugeError,
    ProviderAuthError,
    ProviderUnavailableError,
    WorkspaceNotFoundError,
)

logger = logging.getLogger("gauge.error_handler")

# First matching type wins
HINTS: tuple[tuple[type[GaugeError], str], ...] = (
    (WorkspaceNotFoundError, "Pass an existing project directory: gauge analyze <path>"),
    (ProviderAuthError, "Store a key with: gauge config set-key <provider> <key>"),
    (ProviderUnavailableError, "Run 'gauge doctor' to check your provider configuration."),
    (ConfigError, "Run 'gauge config show' to inspect the resolved configuration."),
)

EXIT_INTERRUPTED = 130


def _debug_mode() -> bool:
    return ui.debug_enabled()


def _hint_for(error: GaugeError) -> str | None:
    return next((hint for cls, hint in HINTS if isinstance(error, cls)), None)


def _print_traceback() -> None:
    ui.console.print(f"\n[dim]{traceback.format_exc()}[/dim]")


def _render_gauge_error(error: GaugeError) -> None:
    """Print the message, then context (debug only) and a next-step hint."""
    console = ui.console
    console.print(f"\n[bold red]Error:[/bold red] {error}")

    if _debug_mode():
        details = {key: value for key, value in error.context.items() if value}
        if details:
            console.print("[dim]Context:[/dim]")
            for key, value in details.items():
                console.print(f"  [dim]{key}:[/dim] {value}")

    hint = _hint_for(error)
    if hint:
        console.print(f"[dim]{hint}[/dim]")


def handle_errors(func):
    """Wrap a typer command so failures end in ``typer.Exit``.

    GaugeError exits with its own ``exit_code``, Ctrl-C with 130 and any
    other exception with 1. ``typer.Exit`` and ``typer.Abort`` pass through.
    Set ``GAUGE_DEBUG=1`` to print tracebacks.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (typer.Exit, typer.Abort, SystemExit):
            raise
        except GaugeError as e:
            logger.debug("%s failed", func.__name__, exc_info=True)
            _render_gauge_error(e)
            if _debug_mode():
                _print_traceback()
            raise typer.Exit(e.exit_code)
        except KeyboardInterrupt:
            ui.console.print("\n[dim]Interrupted.[/dim]")
            raise typer.Exit(EXIT_INTERRUPTED)
        except Exception as e:
            logger.debug("%s crashed", func.__name__, exc_info=True)
            ui.console.print(f"\n[bold red]Unexpected error:[/bold red] {e}")
            if _debug_mode():
                _print_traceback()
            else:
                ui.console.print("[dim]Set GAUGE_DEBUG=1 for full traceback.[/dim]")
            raise typer.Exit(1)

    return wrapper
