from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from stateful.domain.errors import ValidationError


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """What a graph renderer needs besides the DOT text itself."""

    output_path: Path | None = None
    image_format: str = "png"
    layout: str = "dot"
    scale: int = 72
    dpi: int = 200
    size: str = "10,5"

    def __post_init__(self) -> None:
        if self.output_path is not None and not isinstance(self.output_path, Path):
            object.__setattr__(self, "output_path", Path(self.output_path))
        if not self.image_format.strip():
            raise ValidationError("RenderOptions.image_format must be non-empty.")
        if not self.layout.strip():
            raise ValidationError("RenderOptions.layout must be non-empty.")
        if self.scale <= 0:
            raise ValidationError("RenderOptions.scale must be > 0")
        if self.dpi <= 0:
            raise ValidationError("RenderOptions.dpi must be > 0")
