"""Hand a PDF to the operating system's printer or default viewer."""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path
from typing import List

from .core.utils import PathLike
from .core.validator import ensure_input_exists
from .exceptions import ExternalCommandError

LOGGER = logging.getLogger("pdfweave.system")


def _print_command(path: Path, platform: str) -> List[str]:
    if platform.startswith("win"):
        return ["cmd", "/C", "print", str(path)]
    return ["lpr", str(path)]


def _open_command(path: Path, platform: str) -> List[str]:
    if platform.startswith("win"):
        return ["cmd", "/C", "start", "", str(path)]
    if platform == "darwin":
        return ["open", str(path)]
    return ["xdg-open", str(path)]


def _run(command: List[str], action: str) -> int:
    LOGGER.debug("Running %s command: %s", action, command)
    try:
        result = subprocess.run(command, check=False)
    except OSError as exc:
        LOGGER.error("Failed to %s: %s", action, exc)
        raise ExternalCommandError(f"Failed to {action}: {exc}") from exc
    if result.returncode != 0:
        LOGGER.warning("%s command exited with code %s", command[0], result.returncode)
    return result.returncode


def print_pdf(path: PathLike, *, platform: str | None = None) -> int:
    """Send *path* to the default printer and return the command's exit code."""

    source = ensure_input_exists(path)
    return _run(_print_command(source, platform or sys.platform), "print")


def open_pdf_external(path: PathLike, *, platform: str | None = None) -> int:
    """Open *path* with the system's default application."""

    source = ensure_input_exists(path)
    return _run(_open_command(source, platform or sys.platform), "open PDF")


__all__ = ["print_pdf", "open_pdf_external"]
