"""
CLI Command Modules

Each module exposes a Typer sub-application registered by the main CLI.
"""
