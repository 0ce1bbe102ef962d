"""
Config Command

Commands for creating, inspecting and validating SearchFilter configuration.
"""

import json
from pathlib import Path
from typing import Optional, Annotated

import typer
from rich.markup import escape
from rich.table import Table

from searchfilter.cli.error_handling import handle_error
from searchfilter.cli.utils import console
from searchfilter.core.config import ConfigManager
from searchfilter.core.exceptions import SearchFilterError

app = typer.Typer(
    name="config",
    help="Create and inspect configuration files",
    rich_markup_mode="rich",
)

PROFILES = ("default", "documents", "no-video")


@app.command("init")
def init(
    output: Annotated[Path, typer.Argument(help="Where to write the configuration file")] = Path("searchfilter.yaml"),
    profile: Annotated[str, typer.Option("--profile", "-p", help=f"Profile: {', '.join(PROFILES)}")] = "default",
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing file")] = False,
):
    """Write an example configuration file."""
    if profile not in PROFILES:
        raise typer.BadParameter(f"Profile must be one of: {', '.join(PROFILES)}", param_hint="--profile")

    if output.exists() and not force:
        console.print(f"[yellow]{escape(str(output))} already exists, use --force to overwrite[/yellow]")
        raise typer.Exit(1)

    ConfigManager().create_example_config(output, profile=profile)
    console.print(f"[green]Wrote {profile} configuration to {escape(str(output))}[/green]")


@app.command("show")
def show(
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,
):
    """Show the effective configuration and any warnings."""
    manager = ConfigManager(config)
    try:
        app_config = manager.load_config()
    except SearchFilterError as e:
        handle_error(e)

    table = Table(title="Configured Keyword Filters")
    table.add_column("Token", style="cyan")
    table.add_column("Feature", style="magenta")
    for keyword_filter in app_config.filters.keyword_filters():
        feature = keyword_filter.feature.value if keyword_filter.feature else "-"
        table.add_row(escape(str(keyword_filter)), feature)
    console.print(table)
    console.print(f"Log level: [bold]{app_config.effective_log_level()}[/bold]")

    for warning in manager.validate_config():
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")


@app.command("schema")
def schema(
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Write the schema to this file")] = None,
):
    """Print the JSON schema of the configuration file."""
    config_schema = ConfigManager().generate_schema(output)
    if output is None:
        typer.echo(json.dumps(config_schema, indent=2))
    else:
        console.print(f"[green]Schema written to {escape(str(output))}[/green]")
