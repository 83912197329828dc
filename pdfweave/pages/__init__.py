"""Page tree editing for the :mod:`pdfweave` toolkit."""

from __future__ import annotations

from .deleter import delete_pages, delete_pdf_pages, validate_page_deletion
from .utils import normalize_pages, parse_page_spec

__all__ = [
    "delete_pages",
    "delete_pdf_pages",
    "validate_page_deletion",
    "normalize_pages",
    "parse_page_spec",
]
