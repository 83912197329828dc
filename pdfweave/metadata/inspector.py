"""Basic document metadata: page count plus Info title and author."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Dict, Optional

from ..core.codec import load_document
from ..core.objects import Document, PdfObject
from ..core.utils import PathLike, resolve_path

LOGGER = logging.getLogger("pdfweave.metadata")


@dataclass(frozen=True)
class DocumentInfo:
    """Metadata read from an in-memory document."""

    page_count: int
    title: Optional[str] = None
    author: Optional[str] = None


@dataclass(frozen=True)
class PDFInfo:
    """
    Metadata for a PDF on disk.

    Attributes:
        path: Resolved path of the inspected file
        pages: Number of pages in the PDF
        title: Info dictionary title, if set
        author: Info dictionary author, if set
    """

    path: str
    pages: int
    title: Optional[str] = None
    author: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"path": self.path, "pages": self.pages}
        if self.title is not None:
            data["title"] = self.title
        if self.author is not None:
            data["author"] = self.author
        return data


def _as_text(value: PdfObject) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return None


def inspect_document(document: Document) -> DocumentInfo:
    """Return the page count and Info title/author of *document*.

    A missing or malformed Info dictionary, or non-string entries, yield
    ``None`` rather than an error.
    """

    info = document.get_dictionary(document.trailer.get("Info")) or {}
    title = _as_text(document.resolve(info.get("Title")))
    author = _as_text(document.resolve(info.get("Author")))
    return DocumentInfo(page_count=document.page_count, title=title, author=author)


def get_pdf_info(path: PathLike) -> PDFInfo:
    """Load the PDF at *path* and describe it."""

    resolved = resolve_path(path)
    details = inspect_document(load_document(resolved))
    LOGGER.debug("Inspected %s: %d page(s)", resolved, details.page_count)
    return PDFInfo(
        path=str(resolved),
        pages=details.page_count,
        title=details.title,
        author=details.author,
    )


__all__ = ["DocumentInfo", "PDFInfo", "inspect_document", "get_pdf_info"]
