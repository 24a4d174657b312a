"""Textual heuristics shared by the analyzers and the KPI calculator.

Variable references and usages are found by scanning serialized JSON text,
not by parsing template expressions. Substring collisions (``id`` inside
``validId``) and nested braces are known limitations of these helpers and
are kept so that reported numbers stay comparable between runs.
"""

import json
from collections.abc import Mapping
from typing import Any

from flowkpi.constants import (
    AUTHORIZATION_HEADER,
    TEMPLATE_CLOSE,
    TEMPLATE_OPEN,
    TEMPLATE_REFERENCE_PATTERN,
)


def compact_json(value: Any) -> str:
    """Serialize a value to compact JSON text (no whitespace between tokens)."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def text_of(value: Any) -> str:
    """Return a string view of a settings value.

    Strings are returned unchanged, empty values become ``""`` and any other
    value (rich message documents are objects) is serialized to compact JSON.
    """
    if isinstance(value, str):
        return value
    if not value:
        return ""
    return compact_json(value)


def count_lines(source: Any) -> int:
    """Count newline-delimited lines; an empty or missing source has one line."""
    if not isinstance(source, str):
        source = ""
    return len(source.split("\n"))


def find_template_references(settings: Any) -> list[str]:
    """Find ``{{name}}`` references in the serialized form of ``settings``."""
    references = []
    for match in TEMPLATE_REFERENCE_PATTERN.findall(compact_json(settings or {})):
        name = match.strip()
        if name:
            references.append(name)
    return references


def has_template(text: str) -> bool:
    """Check whether text contains both template delimiters."""
    return TEMPLATE_OPEN in text and TEMPLATE_CLOSE in text


def has_authorization_header(headers: Any) -> bool:
    """Check for a non-empty Authorization header, matching the key case-insensitively."""
    if not isinstance(headers, Mapping):
        return False
    return any(
        str(key).lower() == AUTHORIZATION_HEADER and bool(value)
        for key, value in headers.items()
    )
