"""
CLI Utilities

Shared utilities for CLI commands: console output, logging setup and
loading search results from disk.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel

from searchfilter.core.exceptions import ErrorCode, ErrorContext, ValidationError
from searchfilter.results import SearchResult

console = Console()


def setup_logging(level: str = "WARNING") -> None:
    """Set up logging configuration for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        force=True
    )


def print_header(title: str, subtitle: Optional[str] = None) -> None:
    """Print a styled header panel."""
    content = f"[bold cyan]{title}[/bold cyan]"
    if subtitle:
        content += f"\n[dim]{subtitle}[/dim]"
    console.print(Panel(content, border_style="cyan", expand=False))


def load_results(results_file: Path) -> List[SearchResult]:
    """
    Load search results from a JSON file holding an array of objects.

    Args:
        results_file: Path to the JSON file

    Returns:
        Search results in file order

    Raises:
        ValidationError: If the file cannot be read or an entry is invalid
    """
    context = ErrorContext(operation="load_results", file_path=str(results_file))

    try:
        with open(results_file, 'r', encoding='utf-8') as f:
            raw_results = json.load(f)
    except (IOError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValidationError(
            f"Could not read results from {results_file}: {e}",
            error_code=ErrorCode.VALIDATION_FORMAT_ERROR,
            context=context,
            cause=e
        )

    if not isinstance(raw_results, list):
        raise ValidationError(
            f"{results_file} must contain a JSON array of results",
            error_code=ErrorCode.VALIDATION_TYPE_MISMATCH,
            context=context
        )

    results = []
    for index, raw in enumerate(raw_results):
        try:
            results.append(SearchResult.from_raw(raw))
        except ValidationError as e:
            raise ValidationError(
                f"Result {index} in {results_file}: {e.message}",
                error_code=e.error_code,
                context=context,
                cause=e,
                suggestions=e.suggestions
            )
    return results
