"""Tests for variable definition and usage tracking."""

from flowkpi.analysis import VariableAnalyzer
from flowkpi.models import Action, ActionType, Condition, Output, State
from flowkpi.normalizer import normalize


class TestVariableUsage:
    def test_support_flow_discovery_order(self, support_flow_document):
        usage = VariableAnalyzer(normalize(support_flow_document)).get_usage()

        assert list(usage) == [
            "contact.name",
            "input.content",
            "token",
            "orderList",
            "ordersBody",
            "lastMenu",
            "context.lastMenu",
        ]

    def test_definitions_and_uses(self, support_flow_document):
        usage = VariableAnalyzer(normalize(support_flow_document)).get_usage()

        assert usage["orderList"].defined == ("menu",)
        assert usage["orderList"].used == ("menu",)
        assert usage["lastMenu"].defined == ("menu",)
        assert usage["lastMenu"].used == ()
        assert usage["token"].defined == ()
        assert usage["token"].used == ("menu",)
        assert usage["context.lastMenu"].used == ("menu",)

    def test_every_condition_counts_as_a_use(self):
        state = State(
            id="s",
            outputs=(
                Output("a", (Condition(source="context", variable="plan"),)),
                Output("b", (Condition(source="context", variable="plan"),)),
            ),
        )
        usage = VariableAnalyzer((state,)).get_usage()
        assert usage["context.plan"].used == ("s", "s")

    def test_output_variable_of_any_action_is_a_definition(self):
        action = Action(type=ActionType.PROCESS_HTTP, output_variable="response")
        usage = VariableAnalyzer((State(id="s", content_actions=(action,)),)).get_usage()
        assert usage["response"].defined == ("s",)

    def test_settings_variable_only_for_set_variable(self):
        actions = (
            Action(type=ActionType.SET_VARIABLE, settings={"variable": "a"}),
            Action(type=ActionType.SEND_MESSAGE, settings={"variable": "b"}),
        )
        usage = VariableAnalyzer((State(id="s", content_actions=actions),)).get_usage()

        assert "a" in usage
        assert "b" not in usage

    def test_blank_references_are_skipped(self):
        action = Action(type=ActionType.SEND_MESSAGE, settings={"content": "{{ }} and {{ name }}"})
        usage = VariableAnalyzer((State(id="s", content_actions=(action,)),)).get_usage()
        assert list(usage) == ["name"]

    def test_analyzer_can_be_rerun(self, support_flow_document):
        analyzer = VariableAnalyzer(normalize(support_flow_document))
        assert analyzer.get_usage() == analyzer.get_usage()
