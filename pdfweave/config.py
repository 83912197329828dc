"""Runtime settings for pdfweave, with environment variable overrides."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import os
from typing import Mapping, Tuple

LOGGER = logging.getLogger("pdfweave.config")

_TRUTHY = {"1", "true", "yes", "on"}

DEFAULT_WATERMARK_KEYWORDS: Tuple[str, ...] = (
    "Watermark",
    "watermark",
    "WATERMARK",
    "WM",
    "wm",
    "Overlay",
    "overlay",
    "Background",
    "Draft",
    "DRAFT",
    "Confidential",
    "CONFIDENTIAL",
    "Sample",
    "SAMPLE",
    "Copy",
    "COPY",
)


@dataclass(frozen=True)
class EngineSettings:
    """Tunable constants used by the engine.

    Attributes:
        image_dpi: Pixel density assumed when converting image pixels to a
            physical page size.
        sheet_width_mm: Width of the sheet images are shrunk to fit.
        sheet_height_mm: Height of the sheet images are shrunk to fit.
        watermark_keywords: Case-sensitive substrings that flag an object's
            ``/Name`` as a watermark.
        optimize: Run ``qpdf --linearize`` over saved documents when qpdf is
            installed.
        log_level: Level applied to the ``pdfweave`` logger by the CLI.
    """

    image_dpi: float = 96.0
    sheet_width_mm: float = 210.0
    sheet_height_mm: float = 297.0
    watermark_keywords: Tuple[str, ...] = DEFAULT_WATERMARK_KEYWORDS
    optimize: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EngineSettings":
        env = os.environ if environ is None else environ
        settings = cls()

        dpi = env.get("PDFWEAVE_IMAGE_DPI")
        if dpi:
            try:
                value = float(dpi)
            except ValueError:
                LOGGER.warning("Ignoring non-numeric PDFWEAVE_IMAGE_DPI=%r", dpi)
            else:
                if value > 0:
                    settings = replace(settings, image_dpi=value)

        sheet = env.get("PDFWEAVE_SHEET_SIZE_MM")
        if sheet:
            try:
                width, height = (float(part) for part in sheet.lower().split("x", 1))
            except ValueError:
                LOGGER.warning("Ignoring malformed PDFWEAVE_SHEET_SIZE_MM=%r", sheet)
            else:
                settings = replace(settings, sheet_width_mm=width, sheet_height_mm=height)

        keywords = env.get("PDFWEAVE_WATERMARK_KEYWORDS")
        if keywords:
            parsed = tuple(token.strip() for token in keywords.split(",") if token.strip())
            if parsed:
                settings = replace(settings, watermark_keywords=parsed)

        optimize = env.get("PDFWEAVE_OPTIMIZE")
        if optimize is not None:
            settings = replace(settings, optimize=optimize.strip().lower() in _TRUTHY)

        log_level = env.get("PDFWEAVE_LOG_LEVEL")
        if log_level:
            settings = replace(settings, log_level=log_level.strip().upper())

        return settings


def get_settings() -> EngineSettings:
    """Return settings for the current process environment."""

    return EngineSettings.from_env()


__all__ = ["EngineSettings", "DEFAULT_WATERMARK_KEYWORDS", "get_settings"]
