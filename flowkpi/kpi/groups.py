"""Action-category KPI groups for FlowKPI.

Each calculator receives only the data it needs and returns one metric group:
- HttpMetricsCalculator: ``ProcessHttp`` actions
- ScriptMetricsCalculator: ``ExecuteScript`` actions
- InteractionMetricsCalculator: ``SendMessage`` and ``Input`` actions
- VariableMetricsCalculator: ``SetVariable`` actions and output conditions

Groups without actions report their documented defaults.
"""

from collections.abc import Sequence

from flowkpi.common.text import compact_json, count_lines, has_authorization_header, text_of
from flowkpi.constants import (
    AVERAGE_LIFECYCLE_PLACEHOLDER,
    CAMEL_CASE_PATTERN,
    CONSISTENCY_VARIANCE_WEIGHT,
    DEAD_ENDS_RATE_PLACEHOLDER,
    NAVIGATION_CLARITY_PLACEHOLDER,
    RICH_CARD_MEDIA_TYPE,
    SCRIPT_COUPLING_INPUTS,
    SCRIPT_SCORE_CAP,
    SCRIPT_SCORE_LONG_LINES,
    SCRIPT_SCORE_LONG_WEIGHT,
    SCRIPT_SCORE_NO_INPUT_WEIGHT,
    SCRIPT_SCORE_NO_OUTPUT_WEIGHT,
    SCRIPT_SCORE_VERY_LONG_LINES,
    SCRIPT_SCORE_VERY_LONG_WEIGHT,
)
from flowkpi.models import (
    ActionType,
    Condition,
    ConditionSource,
    FlowMetrics,
    HttpActionMetrics,
    InteractionActionMetrics,
    ScriptActionMetrics,
    SourceDistribution,
    State,
    StateAction,
    VariableActionMetrics,
)


def percent(part: int, total: int) -> float:
    """Percentage of ``part`` in ``total``; callers guard ``total > 0``."""
    return (part / total) * 100


class HttpMetricsCalculator:
    """Integration quality of HTTP calls."""

    def __init__(self, metrics: FlowMetrics):
        self.actions = metrics.actions_of(ActionType.PROCESS_HTTP)

    def calculate(self) -> HttpActionMetrics:
        count = len(self.actions)
        if count == 0:
            return HttpActionMetrics.no_actions()

        healthy = sum(1 for a in self.actions if a.settings.get("responseStatusVariable"))
        secure = sum(1 for a in self.actions if has_authorization_header(a.settings.get("headers")))
        blocking = sum(1 for a in self.actions if not a.settings.get("async"))

        uris = [a.uri for a in self.actions if a.uri]
        distinct_uris = len(set(uris))

        return HttpActionMetrics(
            count=count,
            integration_health=percent(healthy, count),
            diversity_of_endpoints=distinct_uris,
            security_rate=percent(secure, count),
            reutilization_rate=len(uris) / distinct_uris if distinct_uris else 0.0,
            performance_risk=blocking,
        )


class ScriptMetricsCalculator:
    """Risk, reuse and hygiene of custom scripts."""

    def __init__(self, metrics: FlowMetrics):
        self.actions = metrics.actions_of(ActionType.EXECUTE_SCRIPT)
        self._settings_text = [
            (other.action, compact_json(other.settings)) for other in metrics.all_actions()
        ]

    def calculate(self) -> ScriptActionMetrics:
        count = len(self.actions)
        if count == 0:
            return ScriptActionMetrics.no_actions()

        scores = [self.risk_score(action) for action in self.actions]
        dead = sum(1 for action in self.actions if self._is_dead(action))
        coupled = sum(1 for a in self.actions if len(a.input_variables) > SCRIPT_COUPLING_INPUTS)
        consistent = sum(1 for action in self.actions if self._is_consistently_named(action))

        return ScriptActionMetrics(
            count=count,
            average_risk_score=sum(scores) / count,
            dead_code_rate=percent(dead, count),
            coupling_rate=percent(coupled, count),
            duplicated_code_rate=self._duplicated_code_rate(),
            naming_consistency=percent(consistent, count),
        )

    @staticmethod
    def risk_score(action: StateAction) -> int:
        """Score a script from 0 to 10 by length and variable contract."""
        lines = count_lines(action.settings.get("source"))
        score = 0
        if lines > SCRIPT_SCORE_LONG_LINES:
            score += SCRIPT_SCORE_LONG_WEIGHT
        if lines > SCRIPT_SCORE_VERY_LONG_LINES:
            score += SCRIPT_SCORE_VERY_LONG_WEIGHT
        if not action.input_variables:
            score += SCRIPT_SCORE_NO_INPUT_WEIGHT
        if not action.output_variable:
            score += SCRIPT_SCORE_NO_OUTPUT_WEIGHT
        return min(SCRIPT_SCORE_CAP, score)

    def _is_dead(self, script: StateAction) -> bool:
        """A script is dead when no other action's settings mention its output."""
        output = script.output_variable
        if not output:
            return True
        return not any(
            output in text
            for action, text in self._settings_text
            if action is not script.action
        )

    def _duplicated_code_rate(self) -> float:
        sources = [text_of(a.settings.get("source")) for a in self.actions]
        sources = [source for source in sources if source]
        if not sources:
            return 0.0
        return percent(len(sources) - len(set(sources)), len(sources))

    @staticmethod
    def _is_consistently_named(action: StateAction) -> bool:
        names = list(action.input_variables)
        if action.output_variable:
            names.append(action.output_variable)
        return all(CAMEL_CASE_PATTERN.match(name) for name in names)


class InteractionMetricsCalculator:
    """Richness and robustness of messages and inputs."""

    def __init__(self, metrics: FlowMetrics):
        self.messages = metrics.actions_of(ActionType.SEND_MESSAGE)
        self.inputs = metrics.actions_of(ActionType.INPUT)

    def calculate(self) -> InteractionActionMetrics:
        count = len(self.messages) + len(self.inputs)
        if count == 0:
            return InteractionActionMetrics.no_actions()

        robust = sum(1 for a in self.inputs if a.settings.get("validation"))

        return InteractionActionMetrics(
            count=count,
            richness_score=self._richness() / count,
            input_robustness=percent(robust, len(self.inputs)) if self.inputs else 100.0,
            navigation_clarity=NAVIGATION_CLARITY_PLACEHOLDER,
            dead_ends_rate=DEAD_ENDS_RATE_PLACEHOLDER,
            consistency_score=self._consistency_score(),
        )

    def _richness(self) -> int:
        richness = 0
        for action in self.messages:
            if RICH_CARD_MEDIA_TYPE in text_of(action.settings.get("content")):
                richness += 3
            if action.settings.get("$cardContent"):
                richness += 2
            richness += 1
        for action in self.inputs:
            if _suggestion_count(action) > 0:
                richness += 2
            richness += 1
        return richness

    def _consistency_score(self) -> float:
        """Lower variance in suggestion counts means a more consistent flow."""
        if not self.inputs:
            return 100.0
        counts = [_suggestion_count(action) for action in self.inputs]
        mean = sum(counts) / len(counts)
        variance = sum((c - mean) ** 2 for c in counts) / len(counts)
        return max(0.0, 100 - variance * CONSISTENCY_VARIANCE_WEIGHT)


class VariableMetricsCalculator:
    """Variable hygiene and condition usage."""

    def __init__(self, metrics: FlowMetrics, states: tuple[State, ...]):
        self.actions = metrics.actions_of(ActionType.SET_VARIABLE)
        self.states = states
        self._action_text = [
            (other.action, compact_json(other.to_document())) for other in metrics.all_actions()
        ]

    def calculate(self) -> VariableActionMetrics:
        count = len(self.actions)
        if count == 0:
            return VariableActionMetrics.no_actions()

        conditions = [c for state in self.states for c in state.conditions]
        orphans = sum(1 for action in self.actions if self._is_orphan(action))

        return VariableActionMetrics(
            count=count,
            orphan_rate=percent(orphans, count),
            average_lifecycle=AVERAGE_LIFECYCLE_PLACEHOLDER,
            condition_complexity=len(conditions) / max(1, len(self.states)),
            source_distribution=self._source_distribution(conditions),
            magic_variables_rate=self._magic_variables_rate(conditions),
        )

    def _is_orphan(self, set_action: StateAction) -> bool:
        """Orphan when no other action mentions the variable anywhere in its document JSON."""
        name = defined_variable(set_action)
        if not name:
            return True
        return not any(
            name in text
            for action, text in self._action_text
            if action is not set_action.action
        )

    @staticmethod
    def _source_distribution(conditions: Sequence[Condition]) -> SourceDistribution:
        inputs = sum(1 for c in conditions if c.source == ConditionSource.INPUT)
        contexts = sum(1 for c in conditions if c.source == ConditionSource.CONTEXT)
        total = inputs + contexts
        if total == 0:
            return SourceDistribution()
        return SourceDistribution(input=percent(inputs, total), context=percent(contexts, total))

    def _magic_variables_rate(self, conditions: Sequence[Condition]) -> float:
        """Share of context variables read by conditions but never set by the flow."""
        defined = {name for name in map(defined_variable, self.actions) if name}
        context_variables = [
            c.variable for c in conditions if c.source == ConditionSource.CONTEXT
        ]
        if not context_variables:
            return 0.0
        magic = sum(1 for variable in context_variables if variable not in defined)
        return percent(magic, len(context_variables))


def defined_variable(action: StateAction) -> str | None:
    """Name of the variable a ``SetVariable`` action defines."""
    if action.output_variable:
        return action.output_variable
    variable = action.settings.get("variable")
    return variable if isinstance(variable, str) and variable else None


def _suggestion_count(action: StateAction) -> int:
    suggestions = action.settings.get("inputSuggestions")
    return len(suggestions) if isinstance(suggestions, list) else 0
