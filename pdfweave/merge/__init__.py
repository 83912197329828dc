"""Merge utilities for the :mod:`pdfweave` toolkit."""

from __future__ import annotations

from .merger import apply_document_info, merge_documents, merge_into, merge_pdfs
from .remap import IdentifierRemapper, RemapTable

__all__ = [
    "merge_pdfs",
    "merge_documents",
    "merge_into",
    "apply_document_info",
    "IdentifierRemapper",
    "RemapTable",
]
