"""
Command-line interface module for FlowKPI.

This module provides the CLI entry point and command implementations
for analyzing bot flow documents.
"""

from flowkpi.cli.main import main

__all__ = ["main"]
