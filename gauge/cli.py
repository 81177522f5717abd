#!/usr/bin/env python3
"""
gauge: walk a project, have an AI provider rate every file, and print an
aggregated code quality report.
"""
import contextlib
import os
from pathlib import Path

import typer

from gauge import ui
from gauge.completions import complete_export_path, complete_provider_name
from gauge.error_handler import handle_errors

app = typer.Typer(
    name="gauge",
    help="AI-assisted code quality reports for whole projects.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

from gauge.commands import config_cmd, doctor_cmd

app.add_typer(config_cmd.app, name="config", help="Manage configuration", rich_help_panel="Setup")
app.add_typer(doctor_cmd.app, name="doctor", help="Check environment and providers", rich_help_panel="Setup")

# Provider name -> env var holding its model, so --model lands in the right slot
MODEL_ENV_VARS = {
    "gemini": "GEMINI_MODEL",
    "anthropic": "ANTHROPIC_MODEL",
    "ollama": "OLLAMA_MODEL",
}


@app.callback()
def main_callback(
    provider: str = typer.Option(
        None, "--provider", "-P",
        help="AI provider to use (gemini, anthropic, ollama). Overrides GAUGE_PROVIDER.",
        autocompletion=complete_provider_name,
    ),
    model: str = typer.Option(
        None, "--model", "-m",
        help="AI model to use. Overrides GEMINI_MODEL / ANTHROPIC_MODEL / OLLAMA_MODEL.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    plain: bool = typer.Option(False, "--plain", help="Plain ASCII output without colors"),
):
    """AI-assisted code quality reports for whole projects."""
    from gauge.core.config_service import get_config_service, reset_config_service

    # Set env vars before the config service resolves so flags win
    if provider:
        os.environ["GAUGE_PROVIDER"] = provider
    if model:
        provider_name = provider or get_config_service().get_provider_name()
        env_var = MODEL_ENV_VARS.get(provider_name, f"{provider_name.upper()}_MODEL")
        os.environ[env_var] = model
    if provider or model:
        reset_config_service()

    ui.set_plain_mode(plain or get_config_service().is_plain_output())
    ui.setup_logging(verbose)


def _progress(enabled: bool):
    if not enabled:
        return contextlib.nullcontext(None)
    return ui.console.status("[bold cyan]Analyzing project...[/bold cyan]")


@app.command(rich_help_panel="Analysis")
@handle_errors
def analyze(
    path: str = typer.Argument(".", help="Path to project directory"),
    json_output: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    output: str = typer.Option(
        None, "--output", "-o",
        help="Also write the report to a file (.json, .yaml or text)",
        autocompletion=complete_export_path,
    ),
):
    """[bold cyan]Analyze[/bold cyan] every file in a project and report code quality."""
    from gauge.analyzers.project_analyzer import ProjectAnalyzer
    from gauge.errors import WorkspaceNotFoundError
    from gauge.providers import UnavailableProvider, connect
    from gauge.report import export_report, render_report, to_dict

    project_path = Path(path).resolve()
    if not project_path.is_dir():
        raise WorkspaceNotFoundError(str(project_path))

    ui.set_json_mode(json_output)

    provider = connect()
    if isinstance(provider, UnavailableProvider):
        if not json_output:
            ui.error_panel(
                f"Failed to initialize AI provider '{provider.name}'",
                f"{provider.reason}\nFiles will be listed without AI ratings.",
            )
    else:
        ui.banner(project_path.name, f"{provider.name} ({provider.model})")

    analyzer = ProjectAnalyzer(provider)
    show_progress = not json_output and not ui.is_plain()

    with _progress(show_progress) as status:
        def on_file(relative_path: str, index: int) -> None:
            if status is not None:
                status.update(f"[bold cyan]Analyzing[/bold cyan] {relative_path} [dim]({index})[/dim]")

        info = analyzer.analyze(project_path, on_file=on_file)
        if status is not None:
            status.update("[bold cyan]Assessing project...[/bold cyan]")
        analysis = analyzer.assess(info)

    if json_output:
        ui.print_json_output(to_dict(info, analysis))
    else:
        ui.console.print()
        render_report(
            info,
            analysis,
            lambda line: ui.console.print(line, markup=False, highlight=False, soft_wrap=True),
            plain=ui.is_plain(),
        )

    if output:
        saved = export_report(info, analysis, Path(output))
        if not json_output:
            ui.console.print(f"\n[green]Report saved to:[/green] {saved}")

    ui.success_message("Project analysis complete.")


@app.command(rich_help_panel="Info")
def models():
    """List known AI models for each provider, plus models pulled on a running Ollama."""
    from rich.table import Table

    from gauge.core.config_service import get_config_service
    from gauge.providers.anthropic_provider import ANTHROPIC_MODELS
    from gauge.providers.gemini_provider import GEMINI_MODELS
    from gauge.providers.ollama_provider import OLLAMA_MODELS, OllamaProvider

    config = get_config_service()
    active_provider = config.get_provider_name()

    table = Table(title="Available Models", show_header=True)
    table.add_column("Provider", style="cyan")
    table.add_column("Model ID", style="bold")
    table.add_column("Description")
    table.add_column("Active", justify="center")

    for provider_name, catalog in (
        ("gemini", GEMINI_MODELS),
        ("anthropic", ANTHROPIC_MODELS),
        ("ollama", OLLAMA_MODELS),
    ):
        active_model = config.get_provider_model(provider_name)
        for model_id, desc in catalog.items():
            active = "*" if provider_name == active_provider and model_id == active_model else ""
            table.add_row(provider_name, model_id, desc, active)

    ui.console.print(table)

    ollama = OllamaProvider()
    pulled = ollama.list_models() if ollama.is_available() else []
    if pulled:
        local = Table(title=f"Pulled on Ollama ({ollama.endpoint})", show_header=True, min_width=60)
        local.add_column("Model ID", style="bold")
        local.add_column("Size", justify="right")
        for entry in pulled:
            size = entry.get("size")
            local.add_row(entry.get("name", "?"), f"{size / 1e9:.1f} GB" if size else "")
        ui.console.print(local)

    ui.console.print()
    ui.console.print("[dim]Switch model:[/dim]  gauge --provider gemini --model gemini-2.5-pro analyze .")
    ui.console.print("[dim]Set default:[/dim]   GEMINI_MODEL=gemini-2.5-pro  (in .env)")


if __name__ == "__main__":
    app()
