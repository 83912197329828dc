"""Metadata inspection for the :mod:`pdfweave` toolkit."""

from __future__ import annotations

from .inspector import DocumentInfo, PDFInfo, get_pdf_info, inspect_document

__all__ = ["DocumentInfo", "PDFInfo", "get_pdf_info", "inspect_document"]
