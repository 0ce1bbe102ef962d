"""
SearchFilter Command-Line Interface

Typer-based CLI for parsing keyword filters out of queries and applying
them to search results.
"""

__version__ = "0.1.0"
