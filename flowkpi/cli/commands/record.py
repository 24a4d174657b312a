"""Record command for building the storage record of an analysis."""

from pathlib import Path
from typing import Annotated

import typer

from flowkpi.cli.utils import handle_cli_errors, write_json_report
from flowkpi.pipeline import build_analysis_record


@handle_cli_errors("Failed to build analysis record")
def record_command(
    ctx: typer.Context,
    source: Annotated[Path, typer.Argument(help="Flow document (JSON or YAML)")],
    name: Annotated[
        str | None,
        typer.Option("--name", "-n", help="Analysis name (defaults to a timestamp)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the record to a file"),
    ] = None,
):
    """
    Build the analysis record: name, original document, canonical states and KPIs.

    The record is always JSON.
    """
    cli_ctx = ctx.obj
    cli_ctx.set_json_mode(output is None)

    document = cli_ctx.load_document_or_exit(source)
    record = build_analysis_record(name, document)

    if output:
        write_json_report(output, record.to_dict())
        cli_ctx.print_success(f"Analysis record '{record.name}' written to {output}")
        return

    cli_ctx.print_json(data=record.to_dict())
