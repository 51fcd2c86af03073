"""
storykit CLI.

Entry point: ``storykit`` (see ``[project.scripts]``).
"""

from __future__ import annotations

import logging
import os
import platform

import typer

from storykit._version import get_version
from storykit.cli.stories import (
    export_command,
    generate_command,
    list_command,
    lorem_command,
    options_command,
    render_command,
)

app = typer.Typer(
    help="storykit - arg schemas and preview descriptors for UI stories",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"storykit {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Configure logging for every command."""
    log_level = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


app.command("generate")(generate_command)
app.command("list")(list_command)
app.command("export")(export_command)
app.command("render")(render_command)
app.command("options")(options_command)
app.command("lorem")(lorem_command)


def main() -> None:
    app()


__all__ = ["app", "main", "version_callback"]
