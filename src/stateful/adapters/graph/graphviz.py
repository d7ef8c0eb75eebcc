from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from shutil import which
from typing import TYPE_CHECKING

from stateful.domain.errors import GraphExportError
from stateful.domain.models.result import Err, Ok

if TYPE_CHECKING:
    from stateful.domain.models.graph import RenderOptions
    from stateful.domain.models.result import Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GraphvizRenderer:
    """Renders DOT text by piping it into the Graphviz `dot` executable."""

    executable: str = "dot"
    timeout_seconds: float = 30.0

    def command(self, options: RenderOptions, /) -> list[str]:
        return [
            self.executable,
            f"-o{options.output_path}",
            f"-T{options.image_format}",
            f"-K{options.layout}",
            f"-s{options.scale}",
            f"-Gsize={options.size}",
            f"-Gdpi={options.dpi}",
        ]

    def render(self, dot: str, options: RenderOptions, /) -> Result[None, Exception]:
        if options.output_path is None:
            return Err(GraphExportError("GraphvizRenderer requires options.output_path"))
        if which(self.executable) is None:
            return Err(
                GraphExportError(
                    f"Graphviz executable {self.executable!r} not found on PATH; "
                    "install Graphviz or use the 'dot-source' renderer."
                )
            )
        cmd = self.command(options)
        logger.debug("Rendering graph: %s", " ".join(cmd))
        try:
            options.output_path.parent.mkdir(parents=True, exist_ok=True)
            cp = subprocess.run(
                cmd,
                input=dot,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired:
            return Err(GraphExportError(f"Graphviz timed out after {self.timeout_seconds}s"))
        except OSError as exc:
            return Err(GraphExportError(f"Graphviz render to {options.output_path} failed: {exc}"))
        if cp.returncode != 0:
            stderr = cp.stderr.strip()
            return Err(GraphExportError(f"Graphviz exited with {cp.returncode}: {stderr}"))
        return Ok(None)
