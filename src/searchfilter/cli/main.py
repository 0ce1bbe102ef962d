#!/usr/bin/env python3
"""
SearchFilter CLI Main Application

Typer-based command-line interface with a multi-command structure and rich
formatting.
"""

import sys
from typing import Optional

import typer
from rich.console import Console

from searchfilter.cli import __version__
from searchfilter.cli.commands import query, config

console = Console()

app = typer.Typer(
    name="searchfilter",
    help="Keyword filters embedded in search queries",
    context_settings={"help_option_names": ["-h", "--help"]},
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.add_typer(query.app, name="query", help="Parse keyword filters and apply them to search results")
app.add_typer(config.app, name="config", help="Create and inspect configuration files")


def version_callback(value: bool):
    """Show version information."""
    if value:
        console.print(f"[bold cyan]SearchFilter[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def app_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information and exit"
    ),
):
    """
    SearchFilter - keyword filters embedded in search queries

    Queries may carry [cyan]+:keyword:word[/cyan] (must contain) and
    [cyan]-:keyword:word[/cyan] (must not contain) tokens next to ordinary
    search terms.

    [bold]Quick Start:[/bold]

    • Inspect a query: [cyan]searchfilter query parse "hamlet +:keyword:pdf"[/cyan]
    • Strip filter tokens: [cyan]searchfilter query clean "hamlet -:keyword:mp4"[/cyan]
    • Filter results: [cyan]searchfilter query filter "+:keyword:pdf" results.json[/cyan]
    • Create a config: [cyan]searchfilter config init[/cyan]
    """
    pass


def main():
    """Entry point for the searchfilter console script."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    main()
