"""Storage boundary record for FlowKPI.

The record bundles everything the storage collaborator persists for one
analysis run. Identifiers and timestamps are assigned by storage, not here.
"""

from typing import Any

from pydantic import Field, field_validator

from .kpi import KPIModel, KPIResult

__all__ = ["FlowAnalysisRecord"]


class FlowAnalysisRecord(KPIModel):
    """One analysis run: the uploaded document, its canonical form and its KPIs."""

    name: str = Field(description="Display name of the analysis")
    original_json: Any = Field(description="Uploaded document, verbatim")
    parsed_data: list[dict[str, Any]] = Field(
        default_factory=list, description="Canonical states in flat-array form"
    )
    kpis: KPIResult = Field(default_factory=KPIResult.empty)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Names must not be blank."""
        if not v.strip():
            raise ValueError("Analysis name cannot be blank")
        return v
