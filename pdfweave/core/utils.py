"""Utilities shared by pdfweave tools."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Union

PathLike = Union[str, Path]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(LOG_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def configure_logging(level: str | int) -> None:
    """Apply *level* to the ``pdfweave`` logger hierarchy."""

    logger = get_logger("pdfweave")
    logger.setLevel(level if isinstance(level, int) else level.upper())


def resolve_path(path: PathLike | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    resolved = Path(path).expanduser().resolve()
    return resolved


def ensure_iterable(paths: Iterable[PathLike]) -> list[Path]:
    """Validate and convert an iterable of paths to :class:`Path` objects."""

    return [resolve_path(path) for path in paths]


__all__ = ["PathLike", "LOG_FORMAT", "get_logger", "configure_logging", "resolve_path", "ensure_iterable"]
