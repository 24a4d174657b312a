"""Pytest configuration and fixtures for FlowKPI tests.

This module provides shared flow documents in both known shapes plus small
builders for the states and actions used across the test suite.
"""

import json
from pathlib import Path
from typing import Any

import pytest

from flowkpi.models import Action, Output, State


def make_action(action_type: str, **fields: Any) -> dict[str, Any]:
    """Build a raw action object as it appears in a flow document."""
    return {"type": action_type, **fields}


def make_state(
    state_id: str,
    targets: tuple[str, ...] = (),
    default: str | None = None,
    is_root: bool = False,
    actions: tuple[Action, ...] = (),
) -> State:
    """Build a canonical state with unconditional outputs."""
    return State(
        id=state_id,
        is_root=is_root,
        content_actions=actions,
        outputs=tuple(Output(target_state_id=target) for target in targets),
        default_output=Output(target_state_id=default) if default else None,
    )


@pytest.fixture
def support_flow_document() -> dict[str, Any]:
    """A four-state support bot in the flow-map shape.

    ``onboarding`` is the only root; ``legacy`` is never referenced.
    """
    return {
        "flow": {
            "onboarding": {
                "$title": "Start",
                "$tags": ["entry"],
                "$position": {"x": 10, "y": 20},
                "$contentActions": [
                    make_action(
                        "SendMessage",
                        **{"$title": "Greeting", "settings": {"content": "Hello {{contact.name}}"}},
                    ),
                    make_action(
                        "Input",
                        settings={
                            "validation": {"rule": "text"},
                            "inputSuggestions": [{"label": "Yes"}, {"label": "No"}],
                        },
                    ),
                ],
                "$conditionOutputs": [
                    {
                        "stateId": "menu",
                        "conditions": [
                            {
                                "source": "input",
                                "variable": "content",
                                "comparison": "equals",
                                "values": ["Yes"],
                            }
                        ],
                    }
                ],
                "$defaultOutput": {"stateId": "fallback"},
            },
            "menu": {
                "$title": "Menu",
                "$enteringCustomActions": [
                    make_action(
                        "ProcessHttp",
                        **{
                            "$title": "Fetch orders",
                            "settings": {
                                "method": "GET",
                                "uri": "https://api.example.com/orders",
                                "headers": {"Authorization": "Bearer {{token}}"},
                                "responseStatusVariable": "ordersStatus",
                                "responseBodyVariable": "ordersBody",
                            },
                        },
                    ),
                    make_action(
                        "ExecuteScript",
                        **{
                            "$title": "Parse orders",
                            "settings": {
                                "function": "run",
                                "source": "function run(ordersBody) {\n"
                                "  return JSON.parse(ordersBody);\n"
                                "}",
                            },
                            "inputVariables": ["ordersBody"],
                            "outputVariable": "orderList",
                        },
                    ),
                ],
                "$contentActions": [
                    make_action("SendMessage", settings={"content": "You have {{orderList}}"}),
                ],
                "$leavingCustomActions": [
                    make_action(
                        "SetVariable",
                        **{"$title": "Remember", "settings": {"variable": "lastMenu", "value": "menu"}},
                    ),
                ],
                "$conditionOutputs": [
                    {
                        "stateId": "fallback",
                        "conditions": [
                            {
                                "source": "context",
                                "variable": "lastMenu",
                                "comparison": "exists",
                                "values": [],
                            }
                        ],
                    }
                ],
                "$defaultOutput": {"stateId": "onboarding"},
            },
            "fallback": {
                "$contentActions": [make_action("SendMessage", settings={"content": "Sorry"})],
                "$defaultOutput": {"stateId": "onboarding"},
            },
            "legacy": {
                "$tags": ["old"],
                "$contentActions": [make_action("SendMessage", settings={"content": "Old"})],
            },
        }
    }


@pytest.fixture
def flat_array_document() -> dict[str, Any]:
    """A three-state flow in the legacy flat-array shape, one with a blank id."""
    return {
        "states": [
            {
                "$id": "welcome",
                "$title": "Welcome",
                "is_root": True,
                "$tags": ["entry"],
                "actions": [
                    make_action("SendMessage", **{"$title": "Hi", "settings": {"content": "Hi!"}})
                ],
                "outputs": [{"stateId": "ask", "conditions": []}],
                "defaultOutput": {"stateId": "ask"},
            },
            {
                "$id": "ask",
                "actions": [make_action("Input", settings={})],
                "outputs": [],
            },
            {"$id": "", "actions": []},
        ]
    }


@pytest.fixture
def write_document(tmp_path: Path):
    """Write a document to a temporary JSON file and return its path."""

    def _write(document: Any, name: str = "flow.json") -> Path:
        file_path = tmp_path / name
        file_path.write_text(json.dumps(document), encoding="utf-8")
        return file_path

    return _write
