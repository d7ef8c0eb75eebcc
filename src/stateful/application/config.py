from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from stateful.domain.errors import ValidationError
from stateful.domain.models.graph import RenderOptions

_LOG_LEVELS = frozenset(logging.getLevelNamesMapping())


@dataclass(frozen=True, slots=True)
class GraphConfig:
    """
    Graph export configuration.

    `renderer` is a name resolved by a `RendererRegistry` in the composition
    root ("graphviz" or "dot-source" by default).
    """

    renderer: str = "graphviz"
    image_format: str = "png"
    layout: str = "dot"
    scale: int = 72
    dpi: int = 200
    size: str = "10,5"
    renderer_kwargs: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.renderer or not self.renderer.strip():
            raise ValidationError("GraphConfig.renderer must be a non-empty string.")
        # Reuse the domain checks for the rendering knobs.
        self.to_render_options()

    def to_render_options(self, output_path: Path | None = None) -> RenderOptions:
        return RenderOptions(
            output_path=output_path,
            image_format=self.image_format,
            layout=self.layout,
            scale=self.scale,
            dpi=self.dpi,
            size=self.size,
        )


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level: str = "INFO"
    console: bool = True
    filepath: Path | None = None
    max_bytes: int = 1_000_000
    backup_count: int = 3
    fmt: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

    def __post_init__(self) -> None:
        if self.level.upper() not in _LOG_LEVELS:
            raise ValidationError(f"Unknown log level {self.level!r}.")
        if self.filepath is not None and not isinstance(self.filepath, Path):
            object.__setattr__(self, "filepath", Path(self.filepath))
        if self.max_bytes < 0:
            raise ValidationError("LoggingConfig.max_bytes must be >= 0")
        if self.backup_count < 0:
            raise ValidationError("LoggingConfig.backup_count must be >= 0")


@dataclass(frozen=True, slots=True)
class StateMachineConfig:
    graph: GraphConfig = field(default_factory=GraphConfig)
    logging: LoggingConfig | None = None


def _load_raw_config(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    suffix = config_path.suffix.lower()
    with config_path.open("r", encoding="utf-8") as stream:
        if suffix in {".yaml", ".yml"}:
            raw = yaml.safe_load(stream)
        elif suffix == ".json":
            raw = json.load(stream)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValidationError(f"Config root must be a mapping, got {type(raw).__name__}.")
    return raw


def load_config(config_path: Path | str) -> StateMachineConfig:
    """Load a `StateMachineConfig` from a JSON or YAML file."""
    config_path = Path(config_path)
    raw = _load_raw_config(config_path)

    try:
        graph = GraphConfig(**raw.get("graph", {}))
        logging_raw = raw.get("logging")
        logging_config = None
        if logging_raw is not None:
            logging_raw = dict(logging_raw)
            log_path = logging_raw.get("filepath")
            if log_path:
                # Relative log paths are relative to the config file.
                logging_raw["filepath"] = (config_path.parent / log_path).resolve()
            logging_config = LoggingConfig(**logging_raw)
    except TypeError as exc:
        raise ValidationError(f"Invalid configuration in {config_path}: {exc}") from exc

    return StateMachineConfig(graph=graph, logging=logging_config)
