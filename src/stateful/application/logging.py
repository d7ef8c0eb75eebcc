"""Logging configuration helpers."""

from __future__ import annotations

import logging
import logging.handlers
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stateful.application.config import LoggingConfig


def configure_logging(config: LoggingConfig, *, logger_name: str = "stateful") -> logging.Logger:
    """
    Attach handlers described by `config` to the package logger.

    Only the `stateful` logger is touched; the root logger and other
    libraries keep their own configuration. Calling this again replaces the
    handlers installed by the previous call.
    """
    log_level = logging.getLevelNamesMapping()[config.level.upper()]
    logger = logging.getLogger(logger_name)
    for handler in [h for h in logger.handlers if getattr(h, "_stateful_managed", False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=config.fmt, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = []

    if config.filepath is not None:
        config.filepath.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=config.filepath,
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )
    if config.console:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler._stateful_managed = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    logger.setLevel(log_level)
    return logger
