from __future__ import annotations

from typing import TYPE_CHECKING

from stateful.adapters.graph.graphviz import GraphvizRenderer
from stateful.api.registries import DefaultRendererRegistry, RendererRegistry
from stateful.application.config import GraphConfig, StateMachineConfig
from stateful.application.logging import configure_logging
from stateful.domain.services.state_machine import StateMachine

if TYPE_CHECKING:
    from collections.abc import Iterable

    from stateful.domain.models.transition import Transition
    from stateful.domain.ports import GraphRendererPort


def create_state_machine(
    transitions: Iterable[Transition] = (),
    *,
    renderer: GraphRendererPort | None = None,
    graph: GraphConfig | None = None,
) -> StateMachine:
    """Convenience factory; renders graphs with Graphviz unless told otherwise."""
    graph = graph or GraphConfig()
    return StateMachine(
        transitions,
        renderer=renderer or GraphvizRenderer(),
        render_options=graph.to_render_options(),
    )


def create_state_machine_from_config(
    config: StateMachineConfig,
    *,
    transitions: Iterable[Transition] = (),
    renderer_registry: RendererRegistry | None = None,
) -> StateMachine:
    """
    Construct a `StateMachine` from config.

    The renderer is resolved by name through `renderer_registry` (built-ins by
    default). When `config.logging` is set, package logging is configured too.
    """
    if config.logging is not None:
        configure_logging(config.logging)
    registry = renderer_registry or DefaultRendererRegistry()
    return create_state_machine(
        transitions,
        renderer=registry.build(config.graph),
        graph=config.graph,
    )
