from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from stateful.domain.errors import GraphExportError
from stateful.domain.models.result import Err, Ok

if TYPE_CHECKING:
    from stateful.domain.models.graph import RenderOptions
    from stateful.domain.models.result import Result


@dataclass(frozen=True, slots=True)
class DotSourceRenderer:
    """Writes the DOT text itself; useful where Graphviz is not installed."""

    encoding: str = "utf-8"

    def render(self, dot: str, options: RenderOptions, /) -> Result[None, Exception]:
        if options.output_path is None:
            return Err(GraphExportError("DotSourceRenderer requires options.output_path"))
        try:
            options.output_path.parent.mkdir(parents=True, exist_ok=True)
            options.output_path.write_text(dot, encoding=self.encoding)
        except OSError as exc:
            return Err(GraphExportError(f"Could not write {options.output_path}: {exc}"))
        return Ok(None)
