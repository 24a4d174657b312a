"""Common utilities and exceptions for FlowKPI."""

from flowkpi.common.exceptions import FlowKPIError, LoadError, OutputError
from flowkpi.common.text import (
    compact_json,
    count_lines,
    find_template_references,
    has_authorization_header,
    has_template,
    text_of,
)

__all__ = [
    # Exceptions
    "FlowKPIError",
    "LoadError",
    "OutputError",
    # Text heuristics
    "compact_json",
    "count_lines",
    "find_template_references",
    "has_authorization_header",
    "has_template",
    "text_of",
]
