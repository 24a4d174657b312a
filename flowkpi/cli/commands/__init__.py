"""CLI commands module for FlowKPI."""

from flowkpi.cli.commands.analyze import analyze_command
from flowkpi.cli.commands.graph import graph_command
from flowkpi.cli.commands.record import record_command
from flowkpi.cli.commands.risks import risks_command

__all__ = [
    "analyze_command",
    "graph_command",
    "record_command",
    "risks_command",
]
