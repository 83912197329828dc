"""pdfweave: merge, clean and edit PDF documents at the object-graph level."""

from __future__ import annotations

__version__ = "1.0.0"

from .config import EngineSettings, get_settings
from .core import Document, Name, Reference, Stream, load_document, save_document
from .exceptions import (
    DocumentLoadError,
    DocumentSaveError,
    DocumentStructureError,
    ExternalCommandError,
    ImageLoadError,
    PdfValidationError,
    PdfWeaveError,
)
from .images import images_to_document, images_to_pdf
from .merge import merge_documents, merge_pdfs
from .metadata import DocumentInfo, PDFInfo, get_pdf_info, inspect_document
from .pages import delete_pages, delete_pdf_pages
from .system import open_pdf_external, print_pdf
from .watermark import WatermarkRemovalResult, remove_watermarks, remove_watermarks_from_pdf

__all__ = [
    "__version__",
    "EngineSettings",
    "get_settings",
    "Document",
    "Name",
    "Reference",
    "Stream",
    "load_document",
    "save_document",
    "PdfWeaveError",
    "DocumentLoadError",
    "ImageLoadError",
    "DocumentStructureError",
    "PdfValidationError",
    "DocumentSaveError",
    "ExternalCommandError",
    "merge_pdfs",
    "merge_documents",
    "remove_watermarks",
    "remove_watermarks_from_pdf",
    "WatermarkRemovalResult",
    "delete_pages",
    "delete_pdf_pages",
    "images_to_document",
    "images_to_pdf",
    "inspect_document",
    "get_pdf_info",
    "DocumentInfo",
    "PDFInfo",
    "print_pdf",
    "open_pdf_external",
]
