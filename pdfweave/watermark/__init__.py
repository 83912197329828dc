"""Watermark removal for the :mod:`pdfweave` toolkit."""

from __future__ import annotations

from .remover import (
    WatermarkRemovalResult,
    find_watermark_objects,
    is_watermark_object,
    remove_watermarks,
    remove_watermarks_from_pdf,
)

__all__ = [
    "WatermarkRemovalResult",
    "find_watermark_objects",
    "is_watermark_object",
    "remove_watermarks",
    "remove_watermarks_from_pdf",
]
