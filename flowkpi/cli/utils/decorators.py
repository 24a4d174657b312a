"""Command error reporting for the FlowKPI CLI.

Commands let exceptions propagate; ``handle_cli_errors`` reports them once
and exits with code 1. FlowKPI errors also carry the file they concern and
a context dict (for example the line and column of a JSON syntax error),
which end up in the JSON error object and in verbose text output.
"""

from collections.abc import Callable
from functools import wraps
from typing import Any

import typer

from flowkpi.common.exceptions import FlowKPIError, LoadError, OutputError


def error_report(message: str, error: BaseException) -> dict[str, Any]:
    """Build the JSON error object for a failed command.

    Args:
        message: Human readable summary
        error: The exception that caused the failure

    Returns:
        ``{"error": ...}`` plus ``file`` and ``context`` when the error has them
    """
    report: dict[str, Any] = {"error": message}
    if isinstance(error, (LoadError, OutputError)) and error.file_path:
        report["file"] = error.file_path
    if isinstance(error, FlowKPIError) and error.context:
        report["context"] = dict(error.context)
    return report


def handle_cli_errors(action: str) -> Callable:
    """Report any failure of the decorated command as ``"<action>: <error>"``.

    The command must take the typer context as its ``ctx`` parameter; its
    ``obj`` is the CLIContext that decides between JSON and text output.

    Example:
        ```python
        @handle_cli_errors("Failed to analyze flow")
        def analyze_command(ctx: typer.Context, source: Path):
            ...
        ```
    """

    def decorator(command: Callable) -> Callable:
        @wraps(command)
        def wrapper(*args, **kwargs):
            ctx = kwargs.get("ctx", args[0] if args else None)
            try:
                return command(*args, **kwargs)
            except typer.Exit:
                raise
            except Exception as e:
                cli_ctx = getattr(ctx, "obj", None)
                if cli_ctx is None:
                    raise
                cli_ctx.report_error(f"{action}: {e}", e)
                raise typer.Exit(1) from e

        return wrapper

    return decorator
