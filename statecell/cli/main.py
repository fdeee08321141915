#!/usr/bin/env python3
"""
statecell CLI

Main entrypoint for the statecell command-line tool.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from statecell import __version__
from statecell.cli.commands import replay, run
from statecell.logging_config import setup_logging

# Initialize Typer app
app = typer.Typer(
    name="statecell",
    help="Synchronous state container with interceptors and deferred effects",
    add_completion=False,
)

# Console for rich output
console = Console()


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (overrides STATECELL_LOG_LEVEL)"
    ),
    log_format: Optional[str] = typer.Option(
        None, "--log-format", help="json or text (overrides STATECELL_LOG_FORMAT)"
    ),
):
    """Configure logging before any command runs."""
    try:
        setup_logging(level=log_level, log_format=log_format)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-format")


# Add standalone commands
app.command("run")(run.run_command)
app.command("replay")(replay.replay_command)


@app.command()
def version():
    """Show version information."""
    table = Table(show_header=False, box=None)
    table.add_row("[bold]statecell[/bold]", f"v{__version__}")
    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
