"""Graph command for displaying the structure of a flow."""

from pathlib import Path
from typing import Annotated

import typer

from flowkpi.cli.utils import handle_cli_errors
from flowkpi.constants import get_output_format
from flowkpi.pipeline import quick_analyze


@handle_cli_errors("Failed to analyze flow structure")
def graph_command(
    ctx: typer.Context,
    source: Annotated[Path, typer.Argument(help="Flow document (JSON or YAML)")],
    json_output: Annotated[
        bool, typer.Option("--json", help="Output in JSON format")
    ] = False,
):
    """Show roots, orphans, connections, endpoints and variable usage."""
    cli_ctx = ctx.obj
    cli_ctx.set_json_mode(json_output or get_output_format() == "json")

    document = cli_ctx.load_document_or_exit(source)
    cli_ctx.printer.print_graph(quick_analyze(document))
