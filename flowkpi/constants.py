"""Constants and default values for FlowKPI.

This module centralizes every threshold, marker and placeholder used by the
analysis engine, plus the environment variable settings read by the CLI.
The engine itself never reads the environment; only the helper functions at
the bottom of this module do, and only the CLI calls them.
"""

import os
import re
from typing import Final

# =============================================================================
# Document Shape Keys
# =============================================================================

FLOW_MAP_KEY: Final[str] = "flow"
FLAT_ARRAY_KEY: Final[str] = "states"

# Heuristic root detection for the flow-map shape
ROOT_STATE_ID: Final[str] = "onboarding"
ROOT_STATE_TOKENS: Final[tuple[str, ...]] = ("inicio", "start")


# =============================================================================
# Script Risk Thresholds
# =============================================================================

SCRIPT_MEDIUM_RISK_LINES: Final[int] = 20
SCRIPT_HIGH_RISK_LINES: Final[int] = 50

# Per-action risk score
SCRIPT_SCORE_LONG_LINES: Final[int] = 10
SCRIPT_SCORE_VERY_LONG_LINES: Final[int] = 50
SCRIPT_SCORE_LONG_WEIGHT: Final[int] = 2
SCRIPT_SCORE_VERY_LONG_WEIGHT: Final[int] = 3
SCRIPT_SCORE_NO_INPUT_WEIGHT: Final[int] = 2
SCRIPT_SCORE_NO_OUTPUT_WEIGHT: Final[int] = 2
SCRIPT_SCORE_CAP: Final[int] = 10

SCRIPT_COUPLING_INPUTS: Final[int] = 3
CAMEL_CASE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-z][a-zA-Z0-9]*$")


# =============================================================================
# Text Heuristics
# =============================================================================

TEMPLATE_REFERENCE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\{\{([^}]+)\}\}")
TEMPLATE_OPEN: Final[str] = "{{"
TEMPLATE_CLOSE: Final[str] = "}}"
RICH_CARD_MEDIA_TYPE: Final[str] = "application/vnd.lime.select+json"
AUTHORIZATION_HEADER: Final[str] = "authorization"


# =============================================================================
# Global KPI Weights
# =============================================================================

COMPLEXITY_CAP: Final[float] = 10.0
COMPLEXITY_STATE_WEIGHT: Final[float] = 0.4
COMPLEXITY_CONDITION_WEIGHT: Final[float] = 0.3
COMPLEXITY_CUSTOM_ACTION_WEIGHT: Final[float] = 0.3
COMPLEXITY_CUSTOM_ACTION_SCALE: Final[float] = 10.0

CLUSTER_DIVISOR: Final[int] = 8
CLUSTER_MIN: Final[int] = 1
CLUSTER_MAX: Final[int] = 10


# =============================================================================
# Placeholder Metrics
# =============================================================================
# These stand in for analyses that are not implemented. Dashboards compare
# runs against these values, so they must not drift.

NAVIGATION_CLARITY_PLACEHOLDER: Final[float] = 3.2
DEAD_ENDS_RATE_PLACEHOLDER: Final[float] = 12.0
AVERAGE_LIFECYCLE_PLACEHOLDER: Final[float] = 4.2

CONSISTENCY_VARIANCE_WEIGHT: Final[float] = 10.0


# =============================================================================
# Location Fallback Labels
# =============================================================================

UNTITLED_SCRIPT_LABEL: Final[str] = "Untitled script"
UNTITLED_HTTP_LABEL: Final[str] = "HTTP call"


# =============================================================================
# Environment Variable Names (CLI only)
# =============================================================================

ENV_VAR_PREFIX: Final[str] = "FLOWKPI_"
ENV_OUTPUT_FORMAT: Final[str] = f"{ENV_VAR_PREFIX}OUTPUT_FORMAT"
ENV_MIN_SEVERITY: Final[str] = f"{ENV_VAR_PREFIX}MIN_SEVERITY"

DEFAULT_OUTPUT_FORMAT: Final[str] = "text"
DEFAULT_MIN_SEVERITY: Final[str] = "low"

OUTPUT_FORMATS: Final[tuple[str, ...]] = ("text", "json")
SEVERITY_LEVELS: Final[tuple[str, ...]] = ("low", "medium", "high")


# =============================================================================
# Helper Functions
# =============================================================================


def get_output_format() -> str:
    """Get the default CLI output format from the environment."""
    value = os.getenv(ENV_OUTPUT_FORMAT, DEFAULT_OUTPUT_FORMAT).strip().lower()
    return value if value in OUTPUT_FORMATS else DEFAULT_OUTPUT_FORMAT


def get_min_severity() -> str:
    """Get the default minimum risk severity from the environment."""
    value = os.getenv(ENV_MIN_SEVERITY, DEFAULT_MIN_SEVERITY).strip().lower()
    return value if value in SEVERITY_LEVELS else DEFAULT_MIN_SEVERITY
