"""
Query Commands

Commands for inspecting the keyword filters in a query, stripping them out,
and applying them to a file of search results.
"""

import json
from pathlib import Path
from typing import List, Optional, Annotated

import typer
from rich.markup import escape
from rich.table import Table

from searchfilter.cli.error_handling import handle_error
from searchfilter.cli.utils import console, load_results, print_header, setup_logging
from searchfilter.core.config import ConfigManager
from searchfilter.core.exceptions import SearchFilterError
from searchfilter.filters import KeywordFilterPipeline, parse_keyword_filters, clean_query

app = typer.Typer(
    name="query",
    help="Parse keyword filters and apply them to search results",
    rich_markup_mode="rich",
)


def _filters_table(pipeline: KeywordFilterPipeline) -> Table:
    table = Table(title="Keyword Filters")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Polarity")
    table.add_column("Keyword", style="bold")
    table.add_column("Feature", style="magenta")
    table.add_column("Token", style="cyan")

    for i, entry in enumerate(pipeline.to_dict()["filters"], 1):
        polarity = "[green]include[/green]" if entry["inclusive"] else "[red]exclude[/red]"
        table.add_row(str(i), polarity, escape(entry["keyword"]), entry["feature"] or "-", escape(entry["canonical_form"]))
    return table


@app.command("parse")
def parse(
    query: Annotated[str, typer.Argument(help="Search query containing [+|-]:keyword:<word> tokens")],
    as_json: Annotated[bool, typer.Option("--json", help="Print machine-readable JSON")] = False,
):
    """
    Show the keyword filters found in a query and the remaining search terms.

    [bold cyan]Example:[/bold cyan]

    • [green]searchfilter query parse "hamlet +:keyword:pdf -:keyword:mp4"[/green]
    """
    pipeline = KeywordFilterPipeline(parse_keyword_filters(query))
    cleaned = pipeline.clean(query)

    if as_json:
        payload = pipeline.to_dict()
        payload["query"] = cleaned
        typer.echo(json.dumps(payload, indent=2))
        return

    if not pipeline:
        console.print("[yellow]No keyword filters found[/yellow]")
    else:
        console.print(_filters_table(pipeline))
    console.print(f"Search terms: [bold]{escape(cleaned)}[/bold]")


@app.command("clean")
def clean(
    query: Annotated[str, typer.Argument(help="Search query containing keyword filter tokens")],
):
    """Print the query with every keyword filter token removed."""
    typer.echo(clean_query(query, parse_keyword_filters(query)))


@app.command("filter")
def filter_results(
    query: Annotated[str, typer.Argument(help="Search query containing keyword filter tokens")],
    results_file: Annotated[Path, typer.Argument(help="JSON file with an array of search results")],
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,
    include: Annotated[Optional[List[str]], typer.Option("--include", "-i", help="Extra keyword results must contain")] = None,
    exclude: Annotated[Optional[List[str]], typer.Option("--exclude", "-e", help="Extra keyword results must not contain")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print accepted results as JSON")] = False,
    explain: Annotated[bool, typer.Option("--explain", help="Show why each result passed or failed")] = False,
    verbose: Annotated[Optional[bool], typer.Option("--verbose", "-v", help="Enable verbose output")] = None,
    debug: Annotated[Optional[bool], typer.Option("--debug", help="Enable debug logging")] = None,
):
    """
    Apply the query's keyword filters, plus configured ones, to search results.

    Filters sharing a feature are alternatives; different features must all
    be satisfied.
    """
    try:
        app_config = ConfigManager(config).load_config({
            'include': include or None,
            'exclude': exclude or None,
            'verbose': verbose,
            'debug': debug,
        })
        setup_logging(app_config.effective_log_level())

        pipeline = KeywordFilterPipeline.from_query(query, app_config.filters.keyword_filters())
        results = load_results(results_file)
    except SearchFilterError as e:
        handle_error(e)

    if explain:
        evaluations = [(result, pipeline.apply(result)) for result in results]
        accepted = [result for result, outcome in evaluations if outcome.passed]
    else:
        evaluations = []
        accepted = pipeline.filter_results(results)

    if as_json:
        typer.echo(json.dumps([
            {
                "display_name": result.display_name,
                "source": result.source,
                "details_url": result.details_url,
            }
            for result in accepted
        ], indent=2))
        return

    print_header("Keyword Filter Results", f"Search terms: {escape(pipeline.clean(query)) or '(none)'}")
    if pipeline:
        console.print(_filters_table(pipeline))

    table = Table(title=f"Accepted {len(accepted)} of {len(results)} results")
    table.add_column("Name", style="bold")
    table.add_column("Source")
    table.add_column("URL", style="dim")
    for result in accepted:
        table.add_row(escape(result.display_name), escape(result.source or "-"), escape(result.details_url))
    console.print(table)

    for result, outcome in evaluations:
        status = "[green]PASS[/green]" if outcome.passed else "[red]FAIL[/red]"
        console.print(f"{status} {escape(result.display_name)}: {escape(outcome.reason)}")
