"""Logging setup shared by the CLI, the service and the analysis pipeline."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, MutableMapping, Tuple

ROOT_LOGGER = "vueinsight"
CONSOLE_FORMAT = "vueinsight %(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``vueinsight.<name>``, or the package logger when ``name`` is empty."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


class ProjectLogger(logging.LoggerAdapter):
    """Tags every message with the name of the project being analysed.

    Scans of several projects can share one log file (the service handles
    many requests), so each line carries ``[project]`` ahead of the message.
    """

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"[{self.extra['project']}] {msg}", kwargs


def project_logger(name: str, root: Path) -> ProjectLogger:
    return ProjectLogger(get_logger(name), {"project": root.name or str(root)})


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Route ``vueinsight`` records to stderr and, optionally, to ``log_file``.

    The console shows INFO and above unless ``verbose`` is set. A log file
    always receives DEBUG records so per-file detail is kept for later.
    Calling this again replaces the handlers of the previous call.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(sink)

    return logger


__all__ = ["ProjectLogger", "configure_logging", "get_logger", "project_logger"]
