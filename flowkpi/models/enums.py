"""
Enums for FlowKPI flow analysis.

This module defines all enums to avoid magic strings throughout the codebase.

Usage:
    from flowkpi.models.enums import (
        ActionType,
        DocumentShape,
        RiskKind,
        RiskSeverity,
    )
"""

from enum import StrEnum

# ============================================================================
# Input Document Enums
# ============================================================================


class DocumentShape(StrEnum):
    """Known shapes of an uploaded flow document."""

    FLOW_MAP = "flow_map"  # {"flow": {state_id: {"$contentActions": ...}}}
    FLAT_ARRAY = "flat_array"  # {"states": [{"$id": ..., "outputs": ...}]}
    UNKNOWN = "unknown"


class ActionType(StrEnum):
    """Action types with dedicated metrics. Other types are kept but not analyzed."""

    PROCESS_HTTP = "ProcessHttp"
    EXECUTE_SCRIPT = "ExecuteScript"
    SEND_MESSAGE = "SendMessage"
    INPUT = "Input"
    SET_VARIABLE = "SetVariable"


class ConditionSource(StrEnum):
    """Condition sources counted by the source distribution metric."""

    INPUT = "input"
    CONTEXT = "context"


# ============================================================================
# Risk Enums
# ============================================================================


class RiskKind(StrEnum):
    """Kinds of heuristic risk findings."""

    HIGH_RISK_SCRIPT = "high_risk_script"
    PERFORMANCE_RISK = "performance_risk"
    DEAD_CODE = "dead_code"
    SECURITY_RISK = "security_risk"


class RiskSeverity(StrEnum):
    """Severity level of risk findings."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Numeric rank for ordering and threshold filtering."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    RiskSeverity.LOW: 0,
    RiskSeverity.MEDIUM: 1,
    RiskSeverity.HIGH: 2,
}
