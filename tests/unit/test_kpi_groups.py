"""Tests for the per-action-category KPI groups."""

from typing import Any

import pytest

from flowkpi.kpi import ScriptMetricsCalculator
from flowkpi.models import (
    Action,
    ActionType,
    HttpActionMetrics,
    InteractionActionMetrics,
    ScriptActionMetrics,
    SourceDistribution,
    StateAction,
    VariableActionMetrics,
)
from flowkpi.pipeline import analyze_flow


def flow_of(*actions: dict[str, Any], outputs: list[dict] | None = None) -> dict[str, Any]:
    """A one-state flow-map document running the given raw actions."""
    state: dict[str, Any] = {"$contentActions": list(actions)}
    if outputs is not None:
        state["$conditionOutputs"] = outputs
    return {"flow": {"onboarding": state}}


def http(uri: str | None = None, **settings: Any) -> dict[str, Any]:
    if uri is not None:
        settings["uri"] = uri
    return {"type": "ProcessHttp", "settings": settings}


def message(content: Any, **settings: Any) -> dict[str, Any]:
    return {"type": "SendMessage", "settings": {"content": content, **settings}}


def set_variable(name: str) -> dict[str, Any]:
    return {"type": "SetVariable", "settings": {"variable": name, "value": "1"}}


def condition(source: str, variable: str) -> dict[str, Any]:
    return {"source": source, "variable": variable, "comparison": "exists", "values": []}


class TestHttpGroup:
    def test_same_uri_twice(self):
        kpis = analyze_flow(flow_of(http("https://x/a"), http("https://x/a")))

        assert kpis.http_actions.count == 2
        assert kpis.http_actions.diversity_of_endpoints == 1
        assert kpis.http_actions.reutilization_rate == 2.0

    def test_health_security_and_performance(self):
        kpis = analyze_flow(
            flow_of(
                http(
                    "https://x/a",
                    responseStatusVariable="status",
                    headers={"AUTHORIZATION": "Bearer x"},
                    **{"async": True},
                ),
                http("https://x/b", headers={}),
                http(),
                http("https://x/b"),
            )
        )
        group = kpis.http_actions

        assert group.integration_health == 25.0
        assert group.security_rate == 25.0
        assert group.performance_risk == 3
        assert group.diversity_of_endpoints == 2
        assert group.reutilization_rate == 1.5

    def test_calls_without_uri(self):
        group = analyze_flow(flow_of(http(), http())).http_actions
        assert group.diversity_of_endpoints == 0
        assert group.reutilization_rate == 0.0

    def test_defaults_without_calls(self):
        group = analyze_flow(flow_of(message("hi"))).http_actions
        assert group == HttpActionMetrics.no_actions()
        assert group.integration_health == 100.0
        assert group.security_rate == 100.0
        assert group.count == 0


class TestScriptGroup:
    def test_weights_are_additive(self):
        long_source = "\n".join("x" for _ in range(60))
        action = StateAction(
            "s", Action(type=ActionType.EXECUTE_SCRIPT, settings={"source": long_source})
        )
        assert ScriptMetricsCalculator.risk_score(action) == 9

    @pytest.mark.parametrize(
        "lines, inputs, output, expected",
        [
            (1, ("a",), "b", 0),
            (11, ("a",), "b", 2),
            (51, ("a",), "b", 5),
            (1, (), "b", 2),
            (1, ("a",), None, 2),
            (51, (), None, 9),
        ],
    )
    def test_risk_score(self, lines, inputs, output, expected):
        action = StateAction(
            "s",
            Action(
                type=ActionType.EXECUTE_SCRIPT,
                settings={"source": "\n".join("x" for _ in range(lines))},
                input_variables=inputs,
                output_variable=output,
            ),
        )
        assert ScriptMetricsCalculator.risk_score(action) == expected

    def test_dead_code(self):
        used = {
            "type": "ExecuteScript",
            "settings": {"source": "a"},
            "inputVariables": ["x"],
            "outputVariable": "total",
        }
        unused = {
            "type": "ExecuteScript",
            "settings": {"source": "b"},
            "inputVariables": ["x"],
            "outputVariable": "discarded",
        }
        no_output = {"type": "ExecuteScript", "settings": {"source": "c"}, "inputVariables": ["x"]}
        kpis = analyze_flow(flow_of(used, unused, no_output, message("Total: {{total}}")))

        assert kpis.script_actions.dead_code_rate == pytest.approx(200 / 3)

    def test_own_settings_do_not_count(self):
        script = {
            "type": "ExecuteScript",
            "settings": {"source": "var total = 1; return total;"},
            "outputVariable": "total",
        }
        assert analyze_flow(flow_of(script)).script_actions.dead_code_rate == 100.0

    def test_coupling_duplication_and_naming(self):
        scripts = [
            {
                "type": "ExecuteScript",
                "settings": {"source": "same"},
                "inputVariables": ["a", "b", "c", "d"],
                "outputVariable": "result",
            },
            {
                "type": "ExecuteScript",
                "settings": {"source": "same"},
                "inputVariables": ["user_name"],
                "outputVariable": "result",
            },
            {"type": "ExecuteScript", "settings": {"source": ""}},
        ]
        group = analyze_flow(flow_of(*scripts)).script_actions

        assert group.count == 3
        assert group.coupling_rate == pytest.approx(100 / 3)
        assert group.duplicated_code_rate == 50.0
        assert group.naming_consistency == pytest.approx(200 / 3)

    def test_defaults_without_scripts(self):
        group = analyze_flow(flow_of(message("hi"))).script_actions
        assert group == ScriptActionMetrics.no_actions()
        assert group.naming_consistency == 100.0
        assert group.average_risk_score == 0.0


class TestInteractionGroup:
    def test_richness(self):
        card = {"type": "application/vnd.lime.select+json", "content": {"text": "Pick"}}
        actions = [
            message(card),
            message("plain", **{"$cardContent": {"document": card}}),
            {"type": "Input", "settings": {"inputSuggestions": [{"label": "A"}]}},
            {"type": "Input", "settings": {}},
        ]
        group = analyze_flow(flow_of(*actions)).interaction_actions

        # (3 + 1) + (2 + 1) + (2 + 1) + 1
        assert group.count == 4
        assert group.richness_score == 11 / 4

    def test_robustness_and_placeholders(self):
        actions = [
            {"type": "Input", "settings": {"validation": {"rule": "number"}}},
            {"type": "Input", "settings": {}},
        ]
        group = analyze_flow(flow_of(*actions)).interaction_actions

        assert group.input_robustness == 50.0
        assert group.navigation_clarity == 3.2
        assert group.dead_ends_rate == 12.0

    def test_consistency_uses_population_variance(self):
        actions = [
            {"type": "Input", "settings": {"inputSuggestions": [{}, {}, {}]}},
            {"type": "Input", "settings": {"inputSuggestions": [{}]}},
        ]
        group = analyze_flow(flow_of(*actions)).interaction_actions
        # variance of [3, 1] is 1
        assert group.consistency_score == 90.0

    def test_consistency_floor(self):
        actions = [
            {"type": "Input", "settings": {"inputSuggestions": [{}] * 10}},
            {"type": "Input", "settings": {}},
        ]
        assert analyze_flow(flow_of(*actions)).interaction_actions.consistency_score == 0.0

    def test_messages_only(self):
        group = analyze_flow(flow_of(message("a"))).interaction_actions
        assert group.input_robustness == 100.0
        assert group.consistency_score == 100.0

    def test_defaults_without_interactions(self):
        group = analyze_flow(flow_of(http("https://x/a"))).interaction_actions
        assert group == InteractionActionMetrics.no_actions()
        assert group.navigation_clarity == 0.0


class TestVariableGroup:
    """SetVariable orphans are found by substring search in other actions."""

    def test_unreferenced_variable_is_orphan(self):
        group = analyze_flow(flow_of(set_variable("foo"), message("hello"))).variable_actions
        assert group.orphan_rate == 100.0

    def test_referenced_variable_is_not_orphan(self):
        group = analyze_flow(flow_of(set_variable("foo"), message("Hi {{foo}}"))).variable_actions
        assert group.orphan_rate == 0.0

    def test_reference_in_keys_outside_the_canonical_model(self):
        """Action-level keys such as ``conditions`` are searched too."""
        guarded = {
            "type": "SendMessage",
            "conditions": [condition("context", "foo")],
            "settings": {"content": "hello"},
        }
        group = analyze_flow(flow_of(set_variable("foo"), guarded)).variable_actions
        assert group.orphan_rate == 0.0

    def test_substring_over_match(self):
        """``id`` is found inside ``validId``, so it is not reported as orphan."""
        group = analyze_flow(flow_of(set_variable("id"), message("validId"))).variable_actions
        assert group.orphan_rate == 0.0

    def test_conditions(self):
        outputs = [
            {"stateId": "a", "conditions": [condition("input", "content")]},
            {
                "stateId": "b",
                "conditions": [condition("context", "plan"), condition("context", "tier")],
            },
        ]
        document = flow_of(set_variable("plan"), outputs=outputs)
        group = analyze_flow(document).variable_actions

        assert group.count == 1
        assert group.average_lifecycle == 4.2
        assert group.condition_complexity == 3.0
        assert group.source_distribution.input == pytest.approx(100 / 3)
        assert group.source_distribution.context == pytest.approx(200 / 3)
        assert group.magic_variables_rate == 50.0

    def test_defaults_without_set_variable_ignore_conditions(self):
        outputs = [{"stateId": "a", "conditions": [condition("context", "plan")]}]
        group = analyze_flow(flow_of(message("hi"), outputs=outputs)).variable_actions

        assert group == VariableActionMetrics.no_actions()
        assert group.source_distribution == SourceDistribution()
        assert group.source_distribution.to_dict() == {"input": 0.0, "context": 0.0}
