"""Object graph model and PDF codec shared by every pdfweave operation."""

from __future__ import annotations

from .codec import load_document, save_document, serialize_document
from .objects import (
    Document,
    Name,
    ObjectId,
    PageEntry,
    PdfObject,
    Reference,
    Stream,
    iter_references,
    rewrite_references,
)

__all__ = [
    "Document",
    "Name",
    "ObjectId",
    "PageEntry",
    "PdfObject",
    "Reference",
    "Stream",
    "iter_references",
    "rewrite_references",
    "load_document",
    "save_document",
    "serialize_document",
]
