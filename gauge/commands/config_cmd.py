"""``gauge config``: inspect and edit settings and stored API keys."""
from __future__ import annotations

from typing import Iterable

import typer
from rich.panel import Panel
from rich.table import Table

from gauge import ui
from gauge.core import secrets
from gauge.core.config_service import get_config_service
from gauge.error_handler import handle_errors
from gauge.errors import ConfigError

app = typer.Typer(
    name="config",
    help="Manage gauge configuration.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

_STORED = ("env", "keyring", "file")


def parse_value(value: str) -> object:
    """Turn a command-line string into a bool, int, list or plain string."""
    lowered = value.lower()
    if lowered in ("true", "yes"):
        return True
    if lowered in ("false", "no"):
        return False
    try:
        return int(value)
    except ValueError:
        pass
    # a,b,c -> list, for analysis.exclude
    if "," in value:
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


def _check_key_provider(provider: str) -> None:
    if provider not in secrets.PROVIDER_KEY_ENV:
        known = ", ".join(sorted(secrets.PROVIDER_KEY_ENV))
        raise ConfigError(f"Unknown provider '{provider}'. Known: {known}", context={"provider": provider})
    if secrets.PROVIDER_KEY_ENV[provider] is None:
        raise ConfigError(f"Provider '{provider}' does not use an API key", context={"provider": provider})


def _two_column(title: str, headers: tuple[str, str], rows: Iterable[tuple[str, str]]) -> Table:
    table = Table(title=title, show_header=True)
    table.add_column(headers[0], style="cyan")
    table.add_column(headers[1])
    for left, right in rows:
        table.add_row(left, right)
    return table


def _provider_rows(providers: dict) -> Iterable[tuple[str, str]]:
    yield "default", str(providers.get("default", ""))
    for name, settings in providers.items():
        if isinstance(settings, dict):
            for key, val in settings.items():
                yield f"{name}.{key}", str(val)


def _analysis_rows(analysis: dict) -> Iterable[tuple[str, str]]:
    for key, val in analysis.items():
        if isinstance(val, list):
            val = ", ".join(map(str, val)) or "[dim]none[/dim]"
        yield key, str(val)


@app.command()
@handle_errors
def show():
    """Print the merged configuration, where it came from, and key status."""
    info = get_config_service().show()
    sources, resolved = info["sources"], info["resolved"]
    missing = "[dim]not found[/dim]"

    ui.console.print(Panel(
        f"Global:  {sources['global_config'] or missing}\n"
        f"Project: {sources['project_config'] or missing}",
        title="Config Sources",
        border_style="cyan",
    ))
    ui.console.print(
        _two_column("Providers", ("Setting", "Value"), _provider_rows(resolved.get("providers", {})))
    )
    if resolved.get("analysis"):
        ui.console.print(
            _two_column("Analysis", ("Setting", "Value"), _analysis_rows(resolved["analysis"]))
        )

    key_rows = (
        (name, f"[green]{status}[/green]" if status in _STORED else f"[dim]{status}[/dim]")
        for name, status in secrets.list_stored_providers().items()
    )
    ui.console.print(_two_column("API Keys", ("Provider", "Status"), key_rows))


@app.command("set")
@handle_errors
def set_value(
    key: str = typer.Argument(..., help="Dotted key, e.g. analysis.max_tokens"),
    value: str = typer.Argument(..., help="New value; a,b,c for lists"),
):
    """Write a value to the global config file."""
    parsed = parse_value(value)
    get_config_service().set_global(key, parsed)
    ui.console.print(f"[green]Set[/green] {key} = {parsed}")


@app.command("set-key")
@handle_errors
def set_key(
    provider: str = typer.Argument(..., help="gemini or anthropic"),
    api_key: str = typer.Argument(..., help="The key itself"),
):
    """Save an API key in the keyring, or the credentials file without one."""
    _check_key_provider(provider)
    secrets.store_key(provider, api_key)
    ui.console.print(f"[green]Stored API key for {provider}[/green]")


@app.command("remove-key")
@handle_errors
def remove_key(
    provider: str = typer.Argument(..., help="gemini or anthropic"),
):
    """Forget a stored API key."""
    _check_key_provider(provider)
    if secrets.remove_key(provider):
        ui.console.print(f"[green]Removed API key for {provider}[/green]")
    else:
        ui.console.print(f"[yellow]No stored key found for {provider}[/yellow]")


@app.command()
@handle_errors
def init():
    """Create a starter .gauge.toml in the current directory."""
    try:
        created = get_config_service().init_project_config()
    except FileExistsError as e:
        raise ConfigError(str(e)) from e
    ui.console.print(f"[green]Created project config:[/green] {created}")


@app.command()
@handle_errors
def path():
    """List the files gauge reads settings and keys from."""
    rows = get_config_service().config_paths().items()
    ui.console.print(_two_column("Config Paths", ("File", "Location"), rows))
