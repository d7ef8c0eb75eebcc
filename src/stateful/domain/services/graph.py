from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stateful.domain.models.transition import Transitions

_HEADER = (
    "digraph StateMachine {",
    "    rankdir=LR",
    "    node[width=1 fixedsize=true shape=circle style=filled]",
)


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_dot(transitions: Transitions) -> str:
    """
    Describe `transitions` as a Graphviz digraph.

    Wildcard-sourced transitions fan out from every known state.
    """
    all_states = transitions.all_states()
    lines = list(_HEADER)
    lines.extend(f"    {_quote(state)}" for state in all_states)
    for transition in transitions:
        destination = _quote(transition.destination)
        label = _quote(transition.id)
        for source in transition.sources:
            origins = all_states if source.is_wildcard else (source,)
            lines.extend(
                f"    {_quote(origin)} -> {destination} [label={label}]" for origin in origins
            )
    lines.append("}")
    return "\n".join(lines) + "\n"
