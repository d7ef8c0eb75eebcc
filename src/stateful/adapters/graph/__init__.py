from __future__ import annotations

from stateful.adapters.graph.dot_source import DotSourceRenderer
from stateful.adapters.graph.graphviz import GraphvizRenderer

__all__ = ["DotSourceRenderer", "GraphvizRenderer"]
