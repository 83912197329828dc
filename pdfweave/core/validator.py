"""Validation helpers shared by pdfweave tools."""

from __future__ import annotations

from pathlib import Path

from ..exceptions import DocumentLoadError
from .utils import PathLike, resolve_path


def ensure_input_exists(path: PathLike) -> Path:
    resolved = resolve_path(path)
    if not resolved.exists():
        raise DocumentLoadError(f"Input file not found: {resolved}")
    if not resolved.is_file():
        raise DocumentLoadError(f"Input path is not a file: {resolved}")
    return resolved


def ensure_output_parent(path: PathLike) -> Path:
    resolved = resolve_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)
    return resolved


__all__ = ["ensure_input_exists", "ensure_output_parent"]
