"""FlowKPI CLI - Typer-based command line interface."""

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from flowkpi.cli.commands import (
    analyze_command,
    graph_command,
    record_command,
    risks_command,
)
from flowkpi.cli.utils import CLIContext

app = typer.Typer(
    name="flowkpi",
    help="FlowKPI: structural and quality KPIs for conversational bot flows",
    no_args_is_help=True,
)
console = Console()


def configure_logging(verbose: bool) -> None:
    """Route package logs to stderr through rich."""
    package_logger = logging.getLogger("flowkpi")
    package_logger.setLevel(logging.INFO if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False)
        )


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose output")
    ] = False,
):
    """
    FlowKPI CLI callback - sets up context for all commands.

    Commands access the shared CLIContext through ctx.obj for document
    loading, error reporting and console output.
    """
    configure_logging(verbose)
    ctx.obj = CLIContext(console=console, verbose=verbose)


app.command(name="analyze")(analyze_command)
app.command(name="risks")(risks_command)
app.command(name="graph")(graph_command)
app.command(name="record")(record_command)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
