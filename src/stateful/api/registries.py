from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Protocol

from stateful.application.config import GraphConfig
from stateful.domain.ports import GraphRendererPort


class RendererRegistry(Protocol):
    """Select/build a `GraphRendererPort` from `GraphConfig`."""

    def build(self, config: GraphConfig, /) -> GraphRendererPort: ...


@dataclass(frozen=True, slots=True)
class DictRendererRegistry(RendererRegistry):
    """A tiny registry that dispatches on `GraphConfig.renderer`."""

    builders: Mapping[str, Callable[[GraphConfig], GraphRendererPort]]

    def build(self, config: GraphConfig, /) -> GraphRendererPort:
        try:
            builder = self.builders[config.renderer]
        except KeyError as e:
            raise ValueError(
                f"Unknown graph renderer {config.renderer!r}. Available: {sorted(self.builders)}"
            ) from e
        return builder(config)


@dataclass(frozen=True, slots=True)
class DefaultRendererRegistry(RendererRegistry):
    """
    Built-in renderers.

    - renderer='graphviz': pipes DOT into the Graphviz `dot` executable
    - renderer='dot-source': writes the DOT text itself
    """

    def build(self, config: GraphConfig, /) -> GraphRendererPort:
        match config.renderer:
            case "graphviz":
                from stateful.adapters.graph.graphviz import GraphvizRenderer

                return GraphvizRenderer(**config.renderer_kwargs)
            case "dot-source":
                from stateful.adapters.graph.dot_source import DotSourceRenderer

                return DotSourceRenderer(**config.renderer_kwargs)
            case _:
                raise ValueError(
                    f"Unknown graph renderer {config.renderer!r}. "
                    "Available: ['dot-source', 'graphviz']"
                )
