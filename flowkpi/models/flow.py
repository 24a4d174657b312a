"""Canonical flow graph models.

Every downstream component works on these types only. They are built once
per analysis by the normalizer and never mutated afterwards.
"""

from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "Action",
    "Condition",
    "Output",
    "State",
    "StateAction",
]


@dataclass(frozen=True)
class Condition:
    """A single comparison guarding an output.

    Attributes:
        source: Where the variable is read from (``input`` or ``context``)
        variable: Variable name
        comparison: Comparison operator name
        values: Comparison operands
    """

    source: str = ""
    variable: str = ""
    comparison: str = ""
    values: tuple[Any, ...] = ()

    @property
    def qualified_name(self) -> str:
        """Variable name qualified by its source, e.g. ``context.userName``."""
        return f"{self.source}.{self.variable}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "variable": self.variable,
            "comparison": self.comparison,
            "values": list(self.values),
        }


@dataclass(frozen=True)
class Output:
    """A conditional transition to another state.

    Conditions are implicitly AND-ed. The target may reference a state that
    does not exist in the flow.
    """

    target_state_id: str
    conditions: tuple[Condition, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "stateId": self.target_state_id,
            "conditions": [condition.to_dict() for condition in self.conditions],
        }


@dataclass(frozen=True, eq=False)
class Action:
    """A unit of behavior executed on entering, during, or on leaving a state.

    Actions compare by identity: two actions with the same content are still
    different actions of the flow.

    Attributes:
        type: Action type tag (see ``ActionType``)
        title: Optional display title
        settings: Type-specific settings (uri, headers, source, content...)
        input_variables: Variables consumed by the action
        output_variable: Variable produced by the action, if any
        id: Optional action identifier from the document
        raw: The action object as written in the document, when read from one
    """

    type: str
    title: str | None = None
    settings: dict[str, Any] = field(default_factory=dict)
    input_variables: tuple[str, ...] = ()
    output_variable: str | None = None
    id: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def has_title(self) -> bool:
        return bool(self.title and self.title.strip())

    @property
    def uri(self) -> str | None:
        """The endpoint URI of an HTTP action, if set."""
        uri = self.settings.get("uri")
        if not uri:
            return None
        return uri if isinstance(uri, str) else str(uri)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.id is not None:
            data["$id"] = self.id
        if self.title is not None:
            data["$title"] = self.title
        if self.settings:
            data["settings"] = self.settings
        if self.input_variables:
            data["inputVariables"] = list(self.input_variables)
        if self.output_variable is not None:
            data["outputVariable"] = self.output_variable
        return data


@dataclass(frozen=True, eq=False)
class StateAction:
    """An action tagged with the id of the state that owns it."""

    state_id: str
    action: Action

    @property
    def type(self) -> str:
        return self.action.type

    @property
    def title(self) -> str | None:
        return self.action.title

    @property
    def settings(self) -> dict[str, Any]:
        return self.action.settings

    @property
    def input_variables(self) -> tuple[str, ...]:
        return self.action.input_variables

    @property
    def output_variable(self) -> str | None:
        return self.action.output_variable

    @property
    def uri(self) -> str | None:
        return self.action.uri

    def to_dict(self) -> dict[str, Any]:
        data = self.action.to_dict()
        data["stateId"] = self.state_id
        return data

    def to_document(self) -> dict[str, Any]:
        """The action as written in the flow document, tagged with its state id.

        Actions built in code have no document form and use ``to_dict()``.
        """
        data = dict(self.action.raw) if self.action.raw else self.action.to_dict()
        data["stateId"] = self.state_id
        return data


@dataclass(frozen=True)
class State:
    """A node in the conversational flow graph.

    Attributes:
        id: Unique key within the flow; may be blank for invalid states
        title: Optional display label
        tags: Documentation tags
        is_root: Whether this state is a valid entry point
        entering_actions: Actions run when the state is entered
        content_actions: Actions run while the state presents content
        leaving_actions: Actions run when the state is left
        outputs: Conditional transitions in evaluation order
        default_output: Fallback transition when no output matches
        position: Editor canvas position, kept for reference only
    """

    id: str
    title: str | None = None
    tags: tuple[str, ...] = ()
    is_root: bool = False
    entering_actions: tuple[Action, ...] = ()
    content_actions: tuple[Action, ...] = ()
    leaving_actions: tuple[Action, ...] = ()
    outputs: tuple[Output, ...] = ()
    default_output: Output | None = None
    position: tuple[float, float] | None = None

    @property
    def is_valid(self) -> bool:
        """A state is valid when it has a non-blank id."""
        return bool(self.id and self.id.strip())

    @property
    def all_actions(self) -> tuple[Action, ...]:
        """Entering, content and leaving actions, in phase order."""
        return self.entering_actions + self.content_actions + self.leaving_actions

    @property
    def custom_actions(self) -> tuple[Action, ...]:
        """Entering and leaving custom actions."""
        return self.entering_actions + self.leaving_actions

    @property
    def conditions(self) -> tuple[Condition, ...]:
        """All conditions of all outputs, in output order."""
        return tuple(
            condition for output in self.outputs for condition in output.conditions
        )

    @property
    def transition_count(self) -> int:
        """Number of outgoing transitions, counting the default output."""
        return len(self.outputs) + (1 if self.default_output is not None else 0)

    def targets(self) -> list[str]:
        """Destination ids of outputs in order, then the default output."""
        targets = [output.target_state_id for output in self.outputs if output.target_state_id]
        if self.default_output is not None and self.default_output.target_state_id:
            targets.append(self.default_output.target_state_id)
        return targets

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the flat-array document field names."""
        data: dict[str, Any] = {"$id": self.id}
        if self.title is not None:
            data["$title"] = self.title
        if self.position is not None:
            data["$position"] = {"x": self.position[0], "y": self.position[1]}
        data["$tags"] = list(self.tags)
        data["is_root"] = self.is_root
        data["enteringCustomActions"] = [a.to_dict() for a in self.entering_actions]
        data["actions"] = [a.to_dict() for a in self.content_actions]
        data["leavingCustomActions"] = [a.to_dict() for a in self.leaving_actions]
        data["outputs"] = [output.to_dict() for output in self.outputs]
        if self.default_output is not None:
            data["defaultOutput"] = self.default_output.to_dict()
        return data
