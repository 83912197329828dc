"""Image to PDF composition for the :mod:`pdfweave` toolkit."""

from __future__ import annotations

from .composer import DOCUMENT_TITLE, images_to_document, images_to_pdf, page_size_points
from .decoder import DecodedImage, decode_image

__all__ = [
    "images_to_document",
    "images_to_pdf",
    "page_size_points",
    "DOCUMENT_TITLE",
    "DecodedImage",
    "decode_image",
]
