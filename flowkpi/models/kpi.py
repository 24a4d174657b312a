"""
KPI result models for FlowKPI.

The KPI record is the only artifact that crosses the boundary to storage and
presentation, so it is a validated pydantic model that serializes with the
camelCase field names the dashboard reads.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = [
    "HttpActionMetrics",
    "InteractionActionMetrics",
    "KPIResult",
    "ScriptActionMetrics",
    "SourceDistribution",
    "VariableActionMetrics",
]

Percentage = Annotated[float, Field(ge=0.0, le=100.0)]


class KPIModel(BaseModel):
    """Base configuration shared by every KPI model."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary with camelCase keys."""
        return self.model_dump(by_alias=True)


class HttpActionMetrics(KPIModel):
    """Metrics for ``ProcessHttp`` actions."""

    count: int = 0
    integration_health: Percentage = 0.0
    diversity_of_endpoints: int = Field(default=0, ge=0)
    security_rate: Percentage = 0.0
    reutilization_rate: float = Field(default=0.0, ge=0.0)
    performance_risk: int = Field(default=0, ge=0)

    @classmethod
    def no_actions(cls) -> "HttpActionMetrics":
        """Defaults for a flow without HTTP actions."""
        return cls(integration_health=100.0, security_rate=100.0)


class ScriptActionMetrics(KPIModel):
    """Metrics for ``ExecuteScript`` actions."""

    count: int = 0
    average_risk_score: float = Field(default=0.0, ge=0.0, le=10.0)
    dead_code_rate: Percentage = 0.0
    coupling_rate: Percentage = 0.0
    duplicated_code_rate: Percentage = 0.0
    naming_consistency: Percentage = 0.0

    @classmethod
    def no_actions(cls) -> "ScriptActionMetrics":
        """Defaults for a flow without scripts."""
        return cls(naming_consistency=100.0)


class InteractionActionMetrics(KPIModel):
    """Metrics for ``SendMessage`` and ``Input`` actions.

    ``navigation_clarity`` is meant to be the average number of options per
    menu and ``dead_ends_rate`` the percentage of inputs that lead nowhere.
    Both are fixed placeholders until real menu and path analysis exists.
    """

    count: int = 0
    richness_score: float = Field(default=0.0, ge=0.0)
    input_robustness: Percentage = 0.0
    navigation_clarity: float = Field(default=0.0, ge=0.0)
    dead_ends_rate: Percentage = 0.0
    consistency_score: Percentage = 0.0

    @classmethod
    def no_actions(cls) -> "InteractionActionMetrics":
        """Defaults for a flow without interactions."""
        return cls(input_robustness=100.0, consistency_score=100.0)


class SourceDistribution(KPIModel):
    """Percentage split of conditions by variable source."""

    input: Percentage = 0.0
    context: Percentage = 0.0


class VariableActionMetrics(KPIModel):
    """Metrics for ``SetVariable`` actions and condition variables.

    ``average_lifecycle`` is meant to be the average number of states between
    a variable's definition and its last use. It is a fixed placeholder.
    """

    count: int = 0
    orphan_rate: Percentage = 0.0
    average_lifecycle: float = Field(default=0.0, ge=0.0)
    condition_complexity: float = Field(default=0.0, ge=0.0)
    source_distribution: SourceDistribution = Field(default_factory=SourceDistribution)
    magic_variables_rate: Percentage = 0.0

    @classmethod
    def no_actions(cls) -> "VariableActionMetrics":
        """Defaults for a flow without ``SetVariable`` actions."""
        return cls()


class KPIResult(KPIModel):
    """Global flow KPIs plus the four action-category groups."""

    # Global KPIs
    health_score: float = Field(default=0.0, ge=0.0, le=1.0)
    complexity_index: float = Field(default=0.0, ge=0.0, le=10.0)
    external_dependency_index: Percentage = 0.0
    maintainability_score: Percentage = 0.0
    branching_factor: float = Field(default=0.0, ge=0.0)
    flow_cohesion: int = Field(default=0, ge=0)
    dynamic_content_rate: Percentage = 0.0
    dead_code_potential: int = Field(default=0, ge=0)

    # Structure metrics
    total_states: int = Field(default=0, ge=0)
    orphan_states: int = Field(default=0, ge=0)
    clusters: int = Field(default=0, ge=0)

    # Action-specific metrics
    http_actions: HttpActionMetrics = Field(default_factory=HttpActionMetrics)
    script_actions: ScriptActionMetrics = Field(default_factory=ScriptActionMetrics)
    interaction_actions: InteractionActionMetrics = Field(
        default_factory=InteractionActionMetrics
    )
    variable_actions: VariableActionMetrics = Field(default_factory=VariableActionMetrics)

    @classmethod
    def empty(cls) -> "KPIResult":
        """The all-zero record reported for a flow without states."""
        return cls()
