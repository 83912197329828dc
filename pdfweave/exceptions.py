"""Custom exceptions raised by :mod:`pdfweave`.

Every failure surfaced by the engine derives from :class:`PdfWeaveError` so
callers can catch a single type, while the subclasses keep the load, validate
and save stages apart.
"""

from __future__ import annotations


class PdfWeaveError(Exception):
    """Base exception for all pdfweave errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF processing error occurred."


class DocumentLoadError(PdfWeaveError):
    """Raised when a source file cannot be read or is not a valid document."""

    @property
    def default_message(self) -> str:
        return "Failed to load PDF."


class ImageLoadError(DocumentLoadError):
    """Raised when an input image cannot be read or decoded."""

    @property
    def default_message(self) -> str:
        return "Failed to decode image."


class DocumentStructureError(PdfWeaveError):
    """Raised when the object graph lacks a Catalog or page tree root."""

    @property
    def default_message(self) -> str:
        return "PDF object graph is missing required structure."


class PdfValidationError(PdfWeaveError):
    """Raised when a request is rejected before any mutation takes place."""

    @property
    def default_message(self) -> str:
        return "Invalid request."


class DocumentSaveError(PdfWeaveError):
    """Raised when a document cannot be serialised to its output path."""

    @property
    def default_message(self) -> str:
        return "Failed to save PDF."


class ExternalCommandError(PdfWeaveError):
    """Raised when a platform print or open command cannot be started."""

    @property
    def default_message(self) -> str:
        return "Failed to run system command."


__all__ = [
    "PdfWeaveError",
    "DocumentLoadError",
    "ImageLoadError",
    "DocumentStructureError",
    "PdfValidationError",
    "DocumentSaveError",
    "ExternalCommandError",
]
