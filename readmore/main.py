#!/usr/bin/env python3
"""
Main CLI entry point for readmore
"""

from typing import Optional

import typer

from readmore import __version__
from readmore.commands.pick import app as pick_app
from readmore.commands.search import app as search_app
from readmore.utils.logging import setup_logging


def version():
    """Show readmore version"""
    typer.echo(f"readmore version {__version__}")


def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
    db_path: Optional[str] = typer.Option(
        None, "--db", envvar="READMORE_DB", help="Path to the SQLite content store"
    ),
):
    """
    readmore - find published items carrying a read-more block

    [bold]Examples:[/bold]

    List items with the marker from the last 30 days:
        [cyan]readmore search[/cyan]

    List items within a window:
        [cyan]readmore search --date-after 2024-01-01 --date-before 2024-01-31[/cyan]

    Pick an item to link to:
        [cyan]readmore pick[/cyan]
    """
    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive", err=True)
        raise typer.Exit(1)

    setup_logging(verbose=verbose, quiet=quiet)
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = db_path


def create_app() -> typer.Typer:
    """Create and configure the main CLI application"""
    app = typer.Typer(rich_markup_mode="rich", no_args_is_help=True)

    for command_app in (search_app, pick_app):
        app.registered_commands.extend(command_app.registered_commands)
    app.command()(version)

    app.callback()(main)
    return app


# Create the app instance
app = create_app()


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
