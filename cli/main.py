#!/usr/bin/env python3
"""
Recipient Registry CLI

Main entrypoint for the registry command-line tool.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from registry.logging_config import setup_logging
from cli.commands import index, recipients, submit

# Initialize Typer app
app = typer.Typer(
    name="registry",
    help="Recipient registry reconciliation CLI",
    add_completion=False,
)

# Console for rich output
console = Console()

app.command("list")(recipients.list_command)
app.command("get")(recipients.get_command)
app.command("show")(recipients.show_command)
app.command("index")(index.index_command)
app.command("add")(submit.add_command)


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="json or text"),
):
    """Configure logging before any command runs."""
    setup_logging(level=log_level, log_format=log_format)


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from registry import __version__ as reconciler_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Registry CLI[/bold]", f"v{__version__}")
    table.add_row("Reconciler", f"v{reconciler_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
