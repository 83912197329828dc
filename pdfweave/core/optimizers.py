"""Optional post-save optimisation using ``qpdf``."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path

LOGGER = logging.getLogger("pdfweave.core")


def _qpdf_available() -> str | None:
    return shutil.which("qpdf")


def linearize_in_place(path: Path) -> bool:
    """Linearize *path* with qpdf, replacing it only when qpdf succeeds.

    Returns ``True`` if the file was rewritten and ``False`` when qpdf is not
    installed or reported an error, in which case *path* is left untouched.
    """

    qpdf_executable = _qpdf_available()
    if not qpdf_executable:
        LOGGER.info("qpdf not available - skipping optimisation")
        return False

    fd, temp_name = tempfile.mkstemp(suffix=".pdf", dir=str(path.parent))
    os.close(fd)
    temp_path = Path(temp_name)
    command = [qpdf_executable, "--linearize", str(path), str(temp_path)]
    LOGGER.debug("Running qpdf command: %s", command)
    try:
        result = subprocess.run(command, capture_output=True, text=True, check=False)
        # qpdf exits with 3 when it succeeded with warnings.
        if result.returncode not in (0, 3):
            LOGGER.warning("qpdf failed with code %s: %s", result.returncode, result.stderr.strip())
            return False
        temp_path.replace(path)
    except OSError as exc:
        LOGGER.warning("Failed to execute qpdf: %s", exc)
        return False
    finally:
        temp_path.unlink(missing_ok=True)

    LOGGER.info("Linearized %s", path)
    return True


__all__ = ["linearize_in_place"]
